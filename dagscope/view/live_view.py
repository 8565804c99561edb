"""LiveGraphView: keeps a graph engine in sync with the latest Snapshot.

Lifecycle
---------
UNINITIALIZED
    ``render()`` asks the mount point for a surface.  No surface means
    the pass is skipped and retried on the next ``render()``.  With a
    surface, an engine is built from the factory, initialized with the
    pending snapshot, given the label overlay and fitted once.
READY
    Every *new* snapshot object is applied as a full replace: clear and
    re-add elements, rerun the layout, refit the viewport.  Re-rendering
    the snapshot already on screen does nothing.
RELEASED
    The engine has been destroyed.  Further renders raise.

The view is a context manager; leaving the ``with`` block always
releases the engine.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from types import TracebackType
from typing import Any

from dagscope.engine.base import EngineFactory, GraphEngine
from dagscope.engine.layouts import DEFAULT_LAYOUT
from dagscope.models.graph import Snapshot
from dagscope.models.view import GraphStyle, RenderSurface

logger = logging.getLogger(__name__)

MountPoint = Callable[[], RenderSurface | None]

LABEL_SELECTOR = "node"


class ViewState(str, Enum):
    """Lifecycle state of a LiveGraphView."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    RELEASED = "released"


class ViewReleasedError(RuntimeError):
    """Raised when rendering into a view whose engine was released."""


def render_label(data: dict[str, Any]) -> str:
    """Overlay renderer: the node's ``label`` field, as-is."""
    return str(data.get("label", ""))


class LiveGraphView:
    """Owns a graph engine and applies snapshots to it in delivery order.

    Parameters
    ----------
    engine_factory:
        Builds the engine on first mount.  Produced by
        :func:`dagscope.engine.configure_engine` at application startup.
    mount_point:
        Returns the surface to draw into, or None while it is unavailable.
    style:
        Visual style; defaults to ``GraphStyle()``.
    layout_name:
        Layout run on initialization and after every rebuild.
    fit_padding:
        Padding (surface units) kept around the graph when fitting.
    overlay_blocks_pointer:
        When True the chrome overlay swallows pointer hit-tests, so
        :meth:`node_at` always returns None.
    """

    def __init__(
        self,
        engine_factory: EngineFactory,
        mount_point: MountPoint,
        *,
        style: GraphStyle | None = None,
        layout_name: str = DEFAULT_LAYOUT,
        fit_padding: float = 0,
        overlay_blocks_pointer: bool = True,
    ) -> None:
        self._engine_factory = engine_factory
        self._mount_point = mount_point
        self._style = style or GraphStyle()
        self._layout_name = layout_name
        self._fit_padding = fit_padding
        self._overlay_blocks_pointer = overlay_blocks_pointer

        self._state = ViewState.UNINITIALIZED
        self._engine: GraphEngine | None = None
        self._surface: RenderSurface | None = None
        self._pending: Snapshot | None = None
        self._applied: Snapshot | None = None

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def engine(self) -> GraphEngine | None:
        """The engine, for reading only.  None until the view is READY."""
        return self._engine

    @property
    def surface(self) -> RenderSurface | None:
        return self._surface

    @property
    def snapshot(self) -> Snapshot | None:
        """The snapshot currently on screen."""
        return self._applied

    @property
    def layout_name(self) -> str:
        return self._layout_name

    @property
    def overlay_blocks_pointer(self) -> bool:
        return self._overlay_blocks_pointer

    # ------------------------------------------------------------------
    # Render passes
    # ------------------------------------------------------------------

    def render(self, snapshot: Snapshot | None = None) -> None:
        """Run one render pass, optionally delivering a new snapshot.

        Called with a snapshot by the data source on every emission, and
        without one by the render loop to retry a deferred mount.

        Raises
        ------
        ViewReleasedError
            If the view has already been released.
        """
        if self._state is ViewState.RELEASED:
            raise ViewReleasedError("Cannot render into a released view")

        if snapshot is not None:
            self._pending = snapshot
        target = self._pending
        if target is None:
            return

        if self._state is ViewState.UNINITIALIZED:
            self._initialize(target)
            return

        engine = self._engine
        if engine is None or target is self._applied:
            return
        self._rebuild(engine, target)

    def node_at(self, x: float, y: float) -> str | None:
        """Pointer hit-test in surface units; None while the overlay blocks."""
        if self._overlay_blocks_pointer or self._engine is None:
            return None
        return self._engine.node_at(x, y)

    def _initialize(self, snapshot: Snapshot) -> None:
        surface = self._mount_point()
        if surface is None:
            logger.debug("No render surface mounted yet; deferring initialization")
            return

        engine = self._engine_factory()
        try:
            engine.initialize(surface, snapshot.elements(), self._style, self._layout_name)
            engine.attach_label_overlay(LABEL_SELECTOR, render_label)
            engine.fit_to_contents(self._fit_padding)
        except BaseException:
            # A half-built engine is never kept; the next render starts over
            engine.destroy()
            raise

        self._engine = engine
        self._surface = surface
        self._applied = snapshot
        self._state = ViewState.READY
        logger.debug(
            "View ready: %d nodes, %d edges",
            len(snapshot.nodes),
            len(snapshot.edges),
        )

    def _rebuild(self, engine: GraphEngine, snapshot: Snapshot) -> None:
        engine.replace_elements(snapshot.elements())
        engine.run_layout(self._layout_name)
        engine.fit_to_contents(self._fit_padding)
        self._applied = snapshot
        logger.debug(
            "View rebuilt: %d nodes, %d edges",
            len(snapshot.nodes),
            len(snapshot.edges),
        )

    # ------------------------------------------------------------------
    # Release
    # ------------------------------------------------------------------

    def release(self) -> None:
        """Destroy the engine.  Safe to call more than once."""
        if self._state is ViewState.RELEASED:
            return
        if self._engine is not None:
            self._engine.destroy()
        self._engine = None
        self._pending = None
        self._state = ViewState.RELEASED
        logger.debug("View released")

    def __enter__(self) -> LiveGraphView:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.release()
