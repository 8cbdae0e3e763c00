from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from postgrest.exceptions import APIError
from app.routes import auth, students, daily_notes, programs, announcements, portal, users
from app.services.session_registry import registry
from contextlib import asynccontextmanager
from dotenv import load_dotenv
import logging
import os

load_dotenv()

logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Drop auth subscriptions of sessions still open at shutdown
    logger.info(f"Closing {len(registry)} portal sessions")
    registry.clear()


app = FastAPI(
    redirect_slashes=False,
    title="Brighter Future Portal API",
    description="Administrative portal API for students, daily notes, programs and staff",
    version="1.0.0",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Portal",
            "description": "Tab navigation and per-tab views",
        },
    ],
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[os.getenv("FRONTEND_URL", "http://localhost:5173")],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(APIError)
async def postgrest_error_handler(request: Request, exc: APIError):
    logger.error(f"Supabase query failed on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=502, content={"detail": exc.message or "Database request failed"})


# Include routers
app.include_router(auth.router, prefix="/auth")
app.include_router(students.router, prefix="/students")
app.include_router(daily_notes.router, prefix="/daily-notes")
app.include_router(programs.router, prefix="/programs")
app.include_router(users.router, prefix="/users")
app.include_router(announcements.router, prefix="/announcements")
app.include_router(portal.router, prefix="/portal", tags=["Portal"])
