from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Registers every table on Base.metadata
import ewave.models  # noqa: F401
from ewave.core.db import init_models
from ewave.core.environment import get_cors_origins
from ewave.core.logging import setup_logging
from ewave.exceptions import register_exception_handlers
from ewave.routers import feedback, health, metrics, purchase, users, vehicles


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    await init_models()
    logger.info("Catalog store ready")
    yield


def create_app() -> FastAPI:
    app = FastAPI(title="eWave Autos Marketplace API", lifespan=lifespan)

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_cors_origins(),
        allow_methods=["*"],   # Allows POST, GET, OPTIONS, etc
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(metrics.router)
    app.include_router(users.router)
    app.include_router(vehicles.router)
    app.include_router(purchase.router)
    app.include_router(feedback.router)
    return app


app = create_app()
