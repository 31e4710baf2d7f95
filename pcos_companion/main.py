"""
PCOS Companion - Local FastAPI Application
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

import httpx
from fastapi import FastAPI

from .api import (
    analysis_router, chat_router, history_router, profile_router, session_router,
    ai_client_error_handler,
)
from .config import settings
from .core.logging_config import setup_logging
from .llm import AIClientError, SecretProvider
from .services import build_companion
from .storage import StorageInterface

logger = logging.getLogger(__name__)


def create_app(
    config: Any = None,
    storage: Optional[StorageInterface] = None,
    secrets: Optional[SecretProvider] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Create the application.

    Args:
        config: Settings object (module settings if None)
        storage: Storage override (LocalStorage at config.local_storage_path if None)
        secrets: Credential source override
        transport: httpx transport override for the inference endpoint
    """
    config = config or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(config)
        app.state.companion = await build_companion(config, storage, secrets, transport)
        logger.info(f"Starting {config.app_name} v{config.app_version}")
        logger.info(f"Storage path: {config.local_storage_path}")
        if not config.llm_api_key and secrets is None:
            logger.warning("No inference API key configured; analysis and chat are unavailable")
        yield
        logger.info(f"Shutting down {config.app_name}")

    app = FastAPI(
        title=config.app_name,
        version=config.app_version,
        description="Local profile, food-analysis history and AI chat for PCOS wellness",
        lifespan=lifespan,
    )

    app.add_exception_handler(AIClientError, ai_client_error_handler)

    app.include_router(profile_router)
    app.include_router(history_router)
    app.include_router(analysis_router)
    app.include_router(chat_router)
    app.include_router(session_router)

    @app.get("/")
    async def root():
        return {
            "app": config.app_name,
            "version": config.app_version,
            "status": "running",
        }

    @app.get("/health")
    async def health_check():
        return {
            "status": "healthy",
            "version": config.app_version,
            "inference_configured": bool(app.state.companion.analysis_agent.provider.secrets.get_api_key()),
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "pcos_companion.main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.debug
    )
