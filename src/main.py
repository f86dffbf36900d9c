"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api import (
    auth,
    categories,
    column_pages,
    columns,
    file_viewer,
    files,
    projects,
    tasks,
)
from src.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    logger.info(f"Starting Kanboard ({settings.environment})")
    yield


app = FastAPI(
    title="Kanboard",
    description="Kanban project management: projects, board columns, categories and attachments",
    version="0.1.0",
    lifespan=lifespan,
)

# JSON API
app.include_router(auth.router)
app.include_router(projects.router)
app.include_router(columns.router)
app.include_router(categories.router)
app.include_router(tasks.router)
app.include_router(files.router)

# HTML pages
app.include_router(column_pages.router)
app.include_router(file_viewer.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
