"""
HTTP application

Usage:
    pip install -e ".[serve]"
    uvicorn prompt_gauge.api.app:create_app --factory
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError

from prompt_gauge.api.scoring import error_response, router as scoring_router
from prompt_gauge.infrastructure.stores.base import ConfigStore
from prompt_gauge.infrastructure.stores.factory import create_config_store
from prompt_gauge.scoring_config import EngineConfig, load_config

logger = logging.getLogger(__name__)


def create_app(
    config: EngineConfig | None = None,
    config_store: ConfigStore | None = None,
) -> FastAPI:
    """
    Create the FastAPI application

    Args:
        config: EngineConfig (loads from env if not provided)
        config_store: Store for the server-wide config override
            (created from the storage configuration if not provided)

    Returns:
        FastAPI application
    """
    if config is None:
        config = load_config()
    if config_store is None:
        config_store = create_config_store(config)

    @asynccontextmanager
    async def _lifespan(_app: FastAPI):
        logger.info("prompt-gauge API started | storage=%s", config.storage.backend)
        yield

    app = FastAPI(title="prompt-gauge", lifespan=_lifespan)
    app.state.scoring_config = config.scoring
    app.state.config_store = config_store

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(_request: Request, exc: RequestValidationError):
        return error_response(
            status.HTTP_400_BAD_REQUEST,
            "잘못된 요청 형식입니다.",
            "INVALID_REQUEST",
            details=[{"loc": list(err.get("loc", ())), "msg": err.get("msg", "")} for err in exc.errors()],
        )

    app.include_router(scoring_router)
    return app
