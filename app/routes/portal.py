from fastapi import APIRouter, Depends
from app.dependencies.auth import portal_session
from app.services.view_router import PROFILE_TAB, TABS

router = APIRouter()

# -------- Navigation --------
@router.get("/tabs")
def get_tabs():
    return {"tabs": TABS, "profile_tab": PROFILE_TAB}

@router.post("/select/{tab}")
async def select_tab(tab: str, session=Depends(portal_session)):
    await session.router.select(tab)
    return await session.render()

@router.post("/profile/close")
async def close_profile(session=Depends(portal_session)):
    session.router.close_profile()
    return await session.render()

# -------- Active view --------
@router.get("/view")
async def get_view(session=Depends(portal_session)):
    return await session.render()
