"""FastAPI application factory for the component runtime service."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import component_packages, load_config
from ..core import ComponentRegistry, load_component_packages
from .routes import router


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Register the standard and configured components before serving."""
    from .. import components  # noqa: F401

    extra = load_component_packages(component_packages(app.state.config))
    if extra:
        logger.info("Registered components from configured packages: %s", ", ".join(extra))
    logger.info("%d components available", len(ComponentRegistry.get_instance().list_types()))

    app.state.started_at = time.time()
    yield


def create_app(config: Optional[dict] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Resolved configuration; loaded from the user config file
            when omitted (as uvicorn's factory mode does)
    """
    app = FastAPI(
        title="Zenith Component Runtime",
        version=__version__,
        description="HTTP API for calling and observing registered components",
        lifespan=lifespan,
    )
    app.state.config = config if config is not None else load_config()
    app.state.started_at = time.time()

    # CORS for local development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)

    return app
