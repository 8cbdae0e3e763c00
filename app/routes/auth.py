from fastapi import APIRouter, Depends, HTTPException
from supabase import AuthError
from app.schemas.auth import Credentials
from app.dependencies.auth import bearer_token, portal_session
from app.services.auth_context import AuthContext
from app.services.portal import PortalSession
from app.services.session_registry import registry
from app.services.supabase import SupabaseConfigError, create_portal_client
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


def describe(session):
    context = session.context
    return {
        "identity": context.identity.model_dump() if context.identity else None,
        "profile": context.profile.model_dump() if context.profile else None,
        "permissions": context.permissions,
        "loading": context.loading,
    }


async def new_context():
    try:
        client = await create_portal_client()
    except SupabaseConfigError as e:
        raise HTTPException(status_code=500, detail=str(e))

    context = AuthContext(client)
    await context.mount()
    return context


async def open_session(context):
    # The auth event from sign-in/sign-up has already started resolving the profile
    await context.settled()
    session = PortalSession(context)
    token = registry.add(session)
    return {"access_token": token, **describe(session)}


# -------- Sign in --------
@router.post("/sign-in")
async def sign_in(credentials: Credentials):
    context = await new_context()
    try:
        await context.sign_in(credentials.email, credentials.password)
    except AuthError as e:
        context.teardown()
        logger.warning(f"Sign-in failed for {credentials.email}: {e.message}")
        raise HTTPException(status_code=401, detail=e.message)

    if not context.access_token:
        context.teardown()
        raise HTTPException(status_code=401, detail="Sign-in did not return a session")

    return await open_session(context)


# -------- Sign up --------
@router.post("/sign-up")
async def sign_up(credentials: Credentials):
    context = await new_context()
    try:
        await context.sign_up(credentials.email, credentials.password)
    except AuthError as e:
        context.teardown()
        logger.warning(f"Sign-up failed for {credentials.email}: {e.message}")
        raise HTTPException(status_code=400, detail=e.message)

    # Projects with email confirmation return no session until the link is used
    if not context.access_token:
        context.teardown()
        return {"status": "confirmation_required", "email": credentials.email}

    return await open_session(context)


# -------- Sign out --------
@router.post("/sign-out")
async def sign_out(token: str = Depends(bearer_token), session=Depends(portal_session)):
    try:
        await session.context.sign_out()
    except AuthError as e:
        logger.error(f"Sign-out failed: {e.message}")
        raise HTTPException(status_code=400, detail=e.message)
    finally:
        registry.remove(token)

    return {"message": "Signed out"}


# -------- Current user --------
@router.get("/me")
async def get_me(session=Depends(portal_session)):
    return describe(session)
