"""Shared Prometheus metrics for the Grammar Check Service.

``METRICS`` is created once at import time and injected via Dishka so routes,
the orchestrator and middleware share the same collectors and avoid duplicate
registration errors.
"""

from __future__ import annotations

from typing import Any

from prometheus_client import REGISTRY, Counter, Histogram


def _create_metrics() -> dict[str, Any]:
    """Create Prometheus metric collectors for the Grammar Check Service."""

    return {
        # HTTP request metrics
        "request_count": Counter(
            "grammar_check_service_http_requests_total",
            "Total number of HTTP requests",
            ["method", "endpoint", "status"],
            registry=REGISTRY,
        ),
        "request_duration": Histogram(
            "grammar_check_service_http_request_duration_seconds",
            "HTTP request duration in seconds",
            ["method", "endpoint"],
            registry=REGISTRY,
        ),
        # Grammar check outcome metrics
        "grammar_checks_total": Counter(
            "grammar_check_service_checks_total",
            "Grammar checks by provider and outcome",
            ["provider", "status"],
            registry=REGISTRY,
        ),
        "grammar_check_duration_seconds": Histogram(
            "grammar_check_service_check_duration_seconds",
            "Time spent producing a grammar check response",
            ["provider", "cached"],
            registry=REGISTRY,
        ),
        "cache_lookups_total": Counter(
            "grammar_check_service_cache_lookups_total",
            "Result cache lookups by outcome",
            ["result"],
            registry=REGISTRY,
        ),
        "provider_fallbacks_total": Counter(
            "grammar_check_service_provider_fallbacks_total",
            "Checks delegated from a provider to its fallback",
            ["provider", "fallback"],
            registry=REGISTRY,
        ),
        "background_task_failures_total": Counter(
            "grammar_check_service_background_task_failures_total",
            "Fire-and-forget tasks that ended with an exception",
            ["task"],
            registry=REGISTRY,
        ),
        # API error tracking metrics
        "api_errors_total": Counter(
            "grammar_check_service_api_errors_total",
            "Total API errors by endpoint and error type",
            ["endpoint", "error_type"],
            registry=REGISTRY,
        ),
    }


# Singleton instance shared across the application
METRICS: dict[str, Any] = _create_metrics()
