"""Shared Prometheus metrics middleware for grammar check HTTP services.

Records request count and duration for every request handled by a Quart app.
Metric objects are looked up by name in ``app.extensions["metrics"]``.
"""

from __future__ import annotations

import time

from quart import Quart, Response, current_app, g, request

from grammarcheck_service_libs.logging_utils import create_service_logger

logger = create_service_logger("grammarcheck.metrics_middleware")


def _endpoint_label() -> str:
    # Route template keeps label cardinality bounded for parameterised paths
    rule = request.url_rule
    return rule.rule if rule is not None else request.path


def setup_metrics_middleware(
    app: Quart,
    request_count_metric_name: str = "request_count",
    request_duration_metric_name: str = "request_duration",
    status_label_name: str = "status_code",
    logger_name: str | None = None,
) -> None:
    """Setup Prometheus metrics middleware for a Quart application.

    Args:
        app: The Quart application to configure
        request_count_metric_name: Key of the request Counter in the metrics dict
        request_duration_metric_name: Key of the duration Histogram in the metrics dict
        status_label_name: Name of the status code label on the Counter
        logger_name: Optional custom logger name for this service
    """
    service_logger = create_service_logger(logger_name) if logger_name else logger

    @app.before_request
    async def before_request() -> None:
        g.start_time = time.time()

    @app.after_request
    async def after_request(response: Response) -> Response:
        try:
            start_time = getattr(g, "start_time", None)
            metrics = getattr(current_app, "extensions", {}).get("metrics", {})

            if start_time is not None and metrics:
                duration = time.time() - start_time
                endpoint = _endpoint_label()
                method = request.method

                request_count = metrics.get(request_count_metric_name)
                request_duration = metrics.get(request_duration_metric_name)

                if request_count:
                    request_count.labels(
                        method=method,
                        endpoint=endpoint,
                        **{status_label_name: str(response.status_code)},
                    ).inc()
                if request_duration:
                    request_duration.labels(method=method, endpoint=endpoint).observe(duration)

        except Exception as e:
            service_logger.error(f"Error recording request metrics: {e}")

        return response
