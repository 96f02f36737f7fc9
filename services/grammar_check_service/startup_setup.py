"""Startup and shutdown logic for the Grammar Check Service."""

from __future__ import annotations

from dishka import make_async_container
from grammarcheck_service_libs.logging_utils import create_service_logger
from grammarcheck_service_libs.quart_app import GrammarCheckApp
from quart_dishka import QuartDishka

from services.grammar_check_service.config import Settings
from services.grammar_check_service.di import (
    CacheProvider,
    CoreInfrastructureProvider,
    GrammarProviderClientsProvider,
    ServiceImplementationsProvider,
)
from services.grammar_check_service.metrics import METRICS

logger = create_service_logger("grammar_check_service.startup")


async def initialize_services(app: GrammarCheckApp, settings: Settings) -> None:
    """Initialize DI container, Quart-Dishka integration, and metrics."""
    try:
        container = make_async_container(
            CoreInfrastructureProvider(),
            CacheProvider(),
            GrammarProviderClientsProvider(),
            ServiceImplementationsProvider(),
        )
        app.container = container
        QuartDishka(app=app, container=container)

        # Expose metrics dictionary through app.extensions for middleware
        app.extensions["metrics"] = METRICS

        logger.info(
            "Grammar Check Service DI container and quart-dishka integration initialized",
            cache_backend=settings.cache_backend.value,
        )
    except Exception as e:
        logger.critical(f"Failed to initialize Grammar Check Service: {e}", exc_info=True)
        raise


async def shutdown_services(app: GrammarCheckApp) -> None:
    """Close the DI container, draining background work and releasing connections."""
    try:
        container = getattr(app, "container", None)
        if container is not None:
            await container.close()
        logger.info("Grammar Check Service shutdown completed")
    except Exception as e:
        logger.error(f"Error during service shutdown: {e}", exc_info=True)
