"""Health and metrics routes for the Grammar Check Service."""

from __future__ import annotations

import time

from dishka import FromDishka
from grammarcheck_service_libs.error_handling.correlation import CorrelationContext
from grammarcheck_service_libs.logging_utils import create_service_logger
from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest
from quart import Blueprint, Response, current_app, jsonify
from quart_dishka import inject

from services.grammar_check_service.config import Settings
from services.grammar_check_service.protocols import KeyValueStoreProtocol

logger = create_service_logger("grammar_check_service.api.health")
health_bp = Blueprint("health_routes", __name__)


@health_bp.route("/healthz")
@inject
async def health_check(
    settings: FromDishka[Settings],
    corr: FromDishka[CorrelationContext],
    store: FromDishka[KeyValueStoreProtocol],
) -> tuple[Response, int]:
    """Standardized health check endpoint with cache store status."""
    checks = {"service_responsive": True, "dependencies_available": True}
    dependencies: dict[str, dict[str, object]] = {}

    try:
        store_healthy = await store.ping()
    except Exception as e:
        logger.warning(f"Cache store health check failed: {e}", correlation_id=corr.original)
        store_healthy = False

    dependencies["cache_store"] = {
        "status": "healthy" if store_healthy else "unhealthy",
        "backend": store.backend,
    }
    if not store_healthy:
        checks["dependencies_available"] = False

    overall_status = "healthy" if all(checks.values()) else "degraded"

    start_time = current_app.extensions.get("service_start_time")
    uptime_seconds = time.time() - start_time if start_time else 0.0

    health_response = {
        "service": settings.SERVICE_NAME,
        "status": overall_status,
        "message": f"Grammar Check Service is {overall_status}",
        "version": settings.VERSION,
        "uptime_seconds": uptime_seconds,
        "checks": checks,
        "dependencies": dependencies,
        "environment": settings.ENVIRONMENT.value,
        "correlation_id": corr.original,
    }

    status_code = 200 if overall_status == "healthy" else 503
    return jsonify(health_response), status_code


@health_bp.route("/metrics")
@inject
async def metrics(registry: FromDishka[CollectorRegistry]) -> Response:
    """Prometheus metrics endpoint."""
    try:
        metrics_data = generate_latest(registry)
        return Response(metrics_data, content_type=CONTENT_TYPE_LATEST)
    except Exception as e:
        logger.error(f"Error generating metrics: {e}", exc_info=True)
        return Response("Error generating metrics", status=500)
