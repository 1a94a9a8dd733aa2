"""
FastAPI application entry point for the Command Center.

This is the main app that:
- Initializes FastAPI with CORS
- Installs the access gate in front of every route
- Registers all API routers
- Sets up the auth client and database connection lifecycle
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from command_center.config import settings
from command_center.database import engine
from command_center.middleware import access_gate
from command_center.services.auth_client import build_auth_client
from command_center.services.outcome import DataServiceError
# Import API routers
from command_center.api import ai, analytics, auth, dashboard, employers, jobs, send_email, students, users

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    On shutdown: close the auth HTTP session and database connections
    """
    # Startup
    logger.info("Starting Command Center API...")
    logger.info(f"Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else 'configured'}")
    logger.info(f"Email mode: {settings.email_mode}")
    if not settings.supabase_service_role_key:
        logger.warning("SUPABASE_SERVICE_ROLE_KEY not set; organizer provisioning is disabled")

    yield

    # Shutdown
    logger.info("Shutting down Command Center API...")
    await app.state.auth_client.close()
    await engine.dispose()


# Initialize FastAPI app
app = FastAPI(
    title="Command Center API",
    description="Admin dashboard API for students, employers, job postings and matches",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

app.state.auth_client = build_auth_client()

# Access gate (added first so CORS wraps it and answers preflight requests)
app.middleware("http")(access_gate)

# Configure CORS
# Set ALLOWED_ORIGINS environment variable with comma-separated domains
allowed_origins = [
    "http://localhost:3000",  # Local development
]

if settings.allowed_origins:
    allowed_origins.extend(origin.strip() for origin in settings.allowed_origins.split(','))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(DataServiceError)
async def data_service_error_handler(request: Request, exc: DataServiceError):
    """Write failures reach the submitting form as {"detail": message}."""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# Register API routers
app.include_router(auth.router, tags=["auth"])
app.include_router(dashboard.router, tags=["dashboard"])
app.include_router(students.router, tags=["students"])
app.include_router(employers.router, prefix="/employers", tags=["employers"])
app.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
app.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
app.include_router(ai.router, prefix="/ai", tags=["ai"])
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(send_email.router, tags=["email"])
