"""
Job Portal - Main Application

FastAPI backend with:
- MongoDB for users, jobs and applications
- JWT authentication (Bearer header or cookie)
- S3-compatible storage for resumes
- SendGrid for account emails
- OCR + AI resume analysis

Run: uvicorn jobportal.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobportal.api.routes import api_router
from jobportal.core.config import get_settings
from jobportal.core.errors import register_error_handlers
from jobportal.db.mongodb import init_mongo_indexes, test_mongo_connection

logger = logging.getLogger(__name__)
settings = get_settings()


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging and MongoDB indexes on startup."""
    configure_logging()
    logger.info("Starting %s...", settings.app_name)
    try:
        init_mongo_indexes()
    except Exception as e:
        logger.warning("MongoDB index initialization failed: %s", e)
    yield
    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="""
    Job portal backend.

    ## Features
    - **Users**: registration with email verification, login, password reset, profiles
    - **Jobs**: employers post and manage jobs, seekers browse and get recommendations
    - **Applications**: submit with resume, accept/reject, per-party delete
    - **Resume analysis**: OCR + AI score and feedback
    """,
    version="1.0.0",
    debug=settings.debug,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include API routes
app.include_router(api_router, prefix="/api/v1")


@app.get("/health", tags=["Health"])
def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "mongodb": "connected" if test_mongo_connection() else "disconnected"
    }
