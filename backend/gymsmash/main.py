"""Gym Smash API - Main Application."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from gymsmash.config import get_settings
from gymsmash.models.base import init_db
from gymsmash.routes import (
    auth_router,
    profile_router,
    schedules_router,
    catalog_router,
    workouts_router,
    progress_router,
    achievements_router,
    leaderboard_router,
    challenges_router,
    buddies_router,
    billing_router,
    media_router,
    admin_router,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("Starting Gym Smash API...")
    if settings.db_auto_init:
        await init_db()
        logger.info("Database tables created")
    yield
    logger.info("Shutting down Gym Smash API...")


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Gym Smash API - personalised gym programming and community features.

    ## Features
    - Magic-link sign in
    - Questionnaire-driven weekly schedules with template rotation
    - Exercise, template and coach catalog
    - Workout logging with streaks, achievements and personal records
    - Leaderboards, challenges and workout buddies
    - Stripe subscriptions, special offers and student pricing
    - Photo and video uploads with stat overlays

    ## Authentication
    All endpoints (except /auth/* and /billing/webhook) require a valid JWT
    token in the Authorization header:
    `Authorization: Bearer <token>`
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(schedules_router)
app.include_router(catalog_router)
app.include_router(workouts_router)
app.include_router(progress_router)
app.include_router(achievements_router)
app.include_router(leaderboard_router)
app.include_router(challenges_router)
app.include_router(buddies_router)
app.include_router(billing_router)
app.include_router(media_router)
app.include_router(admin_router)

# Uploaded media
Path(settings.media_dir).mkdir(parents=True, exist_ok=True)
app.mount(settings.media_url_path, StaticFiles(directory=settings.media_dir), name="media")


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API info."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "gymsmash.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
