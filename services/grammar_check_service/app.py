"""
Grammar Check Service Application.

HTTP API for checking text with a rule-based engine (LanguageTool) or a
language model (OpenAI, OpenRouter), with shared result caching and usage
counters.
"""

from __future__ import annotations

import time

from grammarcheck_service_libs.error_handling.quart_handlers import register_error_handlers
from grammarcheck_service_libs.logging_utils import configure_service_logging, create_service_logger
from grammarcheck_service_libs.metrics_middleware import setup_metrics_middleware
from grammarcheck_service_libs.middleware.quart_correlation_middleware import (
    setup_correlation_middleware,
)
from grammarcheck_service_libs.quart_app import GrammarCheckApp

from services.grammar_check_service.api.grammar_routes import grammar_bp
from services.grammar_check_service.api.health_routes import health_bp
from services.grammar_check_service.config import settings
from services.grammar_check_service.error_handlers import register_grammar_check_error_handlers
from services.grammar_check_service.metrics import METRICS
from services.grammar_check_service.startup_setup import initialize_services, shutdown_services

configure_service_logging(
    "grammar-check-service",
    environment=settings.ENVIRONMENT.value,
    log_level=settings.LOG_LEVEL,
)
logger = create_service_logger("grammar_check_service.app")

app = GrammarCheckApp(__name__)

# Track service startup time for uptime calculation
SERVICE_START_TIME = time.time()


@app.before_serving
async def startup() -> None:
    """Initialize services and middleware."""
    setup_correlation_middleware(app)
    register_error_handlers(app)
    register_grammar_check_error_handlers(app, METRICS)
    await initialize_services(app, settings)

    app.extensions["service_start_time"] = SERVICE_START_TIME

    setup_metrics_middleware(
        app=app,
        request_count_metric_name="request_count",
        request_duration_metric_name="request_duration",
        status_label_name="status",
        logger_name="grammar_check_service.metrics",
    )

    logger.info("Grammar Check Service startup completed successfully")


@app.after_serving
async def shutdown() -> None:
    await shutdown_services(app)


app.register_blueprint(health_bp)
app.register_blueprint(grammar_bp)
