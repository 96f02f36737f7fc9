from __future__ import annotations

import os

_default_host = "0.0.0.0"
_default_port = 8090  # Default port for Grammar Check Service

host = os.getenv("GRAMMAR_CHECK_SERVICE_HOST", _default_host)
port = int(os.getenv("GRAMMAR_CHECK_SERVICE_HTTP_PORT", _default_port))
bind = f"{host}:{port}"
workers = int(os.getenv("WEB_CONCURRENCY", 1))
worker_class = "asyncio"

loglevel = os.getenv("GRAMMAR_CHECK_SERVICE_LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"

graceful_timeout = int(os.getenv("GRACEFUL_TIMEOUT", 30))
keepalive_timeout = int(os.getenv("KEEP_ALIVE_TIMEOUT", 5))
