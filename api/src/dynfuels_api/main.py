"""FastAPI application factory.

Creates the FastAPI app with all routers, middleware, and shared services.

Usage:
    uvicorn dynfuels_api.main:app --reload
"""

from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dynfuels import __version__

from dynfuels_api.routers import classifications, health
from dynfuels_api.services.runner import ClassificationRunner

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

# Shared services (module-level so they survive app recreation in tests)
_runner = ClassificationRunner(metadata_dir=os.environ.get("DYNFUELS_METADATA_DIR"))


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    logging.getLogger(__name__).info("Dynamic Fuel System API started")
    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    application = FastAPI(
        title="Dynamic Fuel System API",
        description="Cohort-based fuel type classification for forest landscapes",
        version=__version__,
        lifespan=lifespan,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Inject services into routers
    classifications.runner = _runner

    # Register routers
    application.include_router(health.router)
    application.include_router(classifications.router)

    return application


app = create_app()
