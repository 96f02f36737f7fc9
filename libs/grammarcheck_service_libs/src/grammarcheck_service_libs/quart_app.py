"""
Type-safe Quart application class for grammar check services.

Replaces setattr()/getattr() access to app-level infrastructure with typed
attributes so routes and startup code can rely on them.
"""

from __future__ import annotations

from typing import Any

from dishka import AsyncContainer
from quart import Quart


class GrammarCheckApp(Quart):
    """Quart application with guaranteed service infrastructure.

    GUARANTEED INFRASTRUCTURE:
        container: Dishka async container, set by the service's startup code
        extensions: Standard Quart extensions dictionary (metrics, start time)

    Examples:
        >>> app = GrammarCheckApp(__name__)
        >>> app.container = make_async_container(...)
    """

    container: AsyncContainer
    """Dishka async container for dependency injection."""

    extensions: dict[str, Any]
    """Standard Quart extensions dictionary."""

    def __init__(self, import_name: str, *args: Any, **kwargs: Any) -> None:
        """Initialize the app; ``container`` must be assigned during startup."""
        super().__init__(import_name, *args, **kwargs)
        self.extensions = {}
