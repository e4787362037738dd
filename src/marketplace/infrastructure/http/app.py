"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketplace.infrastructure.bootstrap import Container, build_container
from marketplace.infrastructure.config import Settings
from marketplace.infrastructure.http.errors import register_error_handlers
from marketplace.infrastructure.http.routes import (
    admin,
    auth,
    cart,
    categories,
    notifications,
    orders,
    payments,
    products,
    profile,
    shipping,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api"


def create_app(settings: Optional[Settings] = None, container: Optional[Container] = None) -> FastAPI:
    """Build the HTTP app around one container of repositories."""
    settings = settings or Settings.from_env()
    container = container or build_container(settings)

    app = FastAPI(title="Marketplace API", version="1.0.0")
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    for module in (
        auth,
        profile,
        products,
        categories,
        cart,
        orders,
        payments,
        shipping,
        notifications,
        admin,
    ):
        app.include_router(module.router, prefix=API_PREFIX)

    @app.get(f"{API_PREFIX}/health")
    def health_check():
        return {"status": "ok"}

    logger.info("Marketplace API ready, data in %s", settings.data_dir)
    return app
