from contextlib import asynccontextmanager

from fastapi import FastAPI
from app.core.config import settings
from app.core.logging import setup_logging
from app.db.projects import ensure_indexes

from app.api.v1.health import router as health_router
from app.api.v1.projects import router as projects_router
from app.api.v1.documentation import router as documentation_router

logger = setup_logging()

@asynccontextmanager
async def lifespan(app: FastAPI):
    await ensure_indexes()
    logger.info("Indexes ensured")
    yield

def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

    app.include_router(health_router, prefix="/api/v1")
    app.include_router(projects_router, prefix="/api/v1")
    app.include_router(documentation_router, prefix="/api/v1")

    return app

app = create_app()
