"""
Bagrut Portal FastAPI Application Entry Point.

Run with: uvicorn bagrut_portal.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bagrut_portal.config import get_settings
from bagrut_portal.api.routes import (
    auth,
    comments,
    dashboard,
    exam_forms,
    exams,
    files,
    messages,
    solutions,
    subjects,
    users,
)
from bagrut_portal.db.session import init_db
from bagrut_portal.storage import get_local_store
from bagrut_portal.storage.seed import seed_collections

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup/shutdown."""
    # Startup
    await init_db()
    if settings.seed_on_startup:
        await seed_collections(get_local_store())
    logger.info("%s started (%s)", settings.app_name, settings.environment)
    yield
    # Shutdown


app = FastAPI(
    title=settings.app_name,
    description="Bagrut exam archive, forums and messaging API",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(subjects.router)
app.include_router(exam_forms.router)
app.include_router(exams.router)
app.include_router(solutions.router)
app.include_router(comments.router)
app.include_router(messages.router)
app.include_router(files.router)
app.include_router(dashboard.router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}
