"""Shared test fixtures for dagscope."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from dagscope.core.event_log import EventLog
from dagscope.engine.base import Element, LabelRenderer
from dagscope.engine.layouts import LayoutRegistry, register_builtin_layouts
from dagscope.models.events import EventRow
from dagscope.models.view import GraphStyle, RenderSurface


# ---------------------------------------------------------------------------
# Recording engine: captures every call the view makes
# ---------------------------------------------------------------------------


class RecordingEngine:
    """Engine double that records calls instead of drawing."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.container: RenderSurface | None = None
        self.elements: list[Element] = []
        self.style: GraphStyle | None = None
        self.layout_name: str | None = None
        self.overlays: list[tuple[str, LabelRenderer]] = []
        self.fit_paddings: list[float] = []

    def initialize(
        self,
        container: RenderSurface,
        elements: list[Element],
        style: GraphStyle,
        layout_name: str,
    ) -> None:
        self.calls.append("initialize")
        self.container = container
        self.elements = list(elements)
        self.style = style
        self.layout_name = layout_name

    def replace_elements(self, elements: list[Element]) -> None:
        self.calls.append("replace_elements")
        self.elements = list(elements)

    def run_layout(self, layout_name: str) -> None:
        self.calls.append("run_layout")
        self.layout_name = layout_name

    def fit_to_contents(self, padding: float = 0) -> None:
        self.calls.append("fit_to_contents")
        self.fit_paddings.append(padding)

    def attach_label_overlay(self, selector: str, renderer: LabelRenderer) -> None:
        self.calls.append("attach_label_overlay")
        self.overlays.append((selector, renderer))

    def node_at(self, x: float, y: float) -> str | None:
        self.calls.append("node_at")
        return "ROOT"

    def destroy(self) -> None:
        self.calls.append("destroy")

    def count(self, name: str) -> int:
        return self.calls.count(name)

    @property
    def node_ids(self) -> list[str]:
        return [e["data"]["id"] for e in self.elements if e["group"] == "nodes"]

    @property
    def edge_pairs(self) -> list[tuple[str, str]]:
        return [
            (e["data"]["source"], e["data"]["target"])
            for e in self.elements
            if e["group"] == "edges"
        ]


class RecordingFactory:
    """Engine factory that keeps every engine it builds."""

    def __init__(self) -> None:
        self.engines: list[RecordingEngine] = []

    def __call__(self) -> RecordingEngine:
        engine = RecordingEngine()
        self.engines.append(engine)
        return engine

    @property
    def engine(self) -> RecordingEngine:
        assert self.engines, "no engine built yet"
        return self.engines[-1]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test artifacts."""
    return tmp_path


@pytest.fixture
def event_log(tmp_dir: Path) -> EventLog:
    """Provide a fresh EventLog backed by a temp SQLite database."""
    return EventLog(tmp_dir / "events.db")


@pytest.fixture
def surface() -> RenderSurface:
    """Default 425x500 render surface."""
    return RenderSurface()


@pytest.fixture
def recording_factory() -> RecordingFactory:
    return RecordingFactory()


@pytest.fixture
def layouts() -> LayoutRegistry:
    """A LayoutRegistry with the built-in layouts registered."""
    registry = LayoutRegistry()
    register_builtin_layouts(registry)
    return registry


@pytest.fixture
def make_row() -> Callable[..., EventRow]:
    """Factory fixture: build an EventRow with sensible defaults."""

    def _factory(
        event_id: int = 1,
        parent_id: int | None = None,
        type: str = "create",
        value: Any = "x",
        **overrides: Any,
    ) -> EventRow:
        defaults: dict[str, Any] = {
            "event_id": event_id,
            "parent_id": parent_id,
            "type": type,
            "value": value,
        }
        defaults.update(overrides)
        return EventRow(**defaults)

    return _factory
