"""Graph engine capability: contract, layouts, and the terminal engine.

Layouts are registered explicitly, once, by the application at startup
via :func:`configure_engine`.  The returned factory is what views receive;
views never register anything themselves.
"""

from __future__ import annotations

import logging

from dagscope.engine.base import (
    EngineError,
    EngineFactory,
    GraphEngine,
    UnknownLayoutError,
)
from dagscope.engine.layouts import (
    DEFAULT_LAYOUT,
    LayoutRegistry,
    register_builtin_layouts,
)
from dagscope.engine.terminal import TerminalGraphEngine

logger = logging.getLogger(__name__)


def configure_engine(registry: LayoutRegistry | None = None) -> EngineFactory:
    """Register the built-in layouts and return a terminal engine factory.

    Parameters
    ----------
    registry:
        Registry to populate.  A fresh one is created when omitted, so
        repeated calls never share mutable state.

    Returns
    -------
    EngineFactory
        Zero-argument callable producing a new ``TerminalGraphEngine``
        bound to ``registry``.
    """
    registry = registry if registry is not None else LayoutRegistry()
    register_builtin_layouts(registry)
    logger.debug("Engine configured with layouts: %s", ", ".join(registry.names()))

    def _factory() -> TerminalGraphEngine:
        return TerminalGraphEngine(registry)

    return _factory


__all__ = [
    "DEFAULT_LAYOUT",
    "EngineError",
    "EngineFactory",
    "GraphEngine",
    "LayoutRegistry",
    "TerminalGraphEngine",
    "UnknownLayoutError",
    "configure_engine",
]
