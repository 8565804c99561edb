"""Event log row model: one causal event as read back from the log.

Rows arrive from the ``event_dag JOIN event`` query with camelCase column
aliases (``eventId``, ``parentId``, ``itemId``).  Both the aliases and the
snake_case field names are accepted.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EventRow(BaseModel):
    """A single causal event joined with its DAG link.

    ``parent_id`` is an explicit optional reference: ``None`` means the
    event attaches to the synthetic root.  Parent presence is never
    inferred from truthiness, so a parent id of ``0`` is a real parent.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    event_id: int = Field(alias="eventId")
    parent_id: int | None = Field(default=None, alias="parentId")
    item_id: int | str | None = Field(default=None, alias="itemId")
    type: str
    value: Any = None

    @field_validator("parent_id", mode="before")
    @classmethod
    def _blank_parent_is_absent(cls, v: Any) -> Any:
        # Loosely typed sources hand us "" for a missing parent
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("item_id", mode="before")
    @classmethod
    def _blank_item_is_absent(cls, v: Any) -> Any:
        if isinstance(v, str) and v == "":
            return None
        return v

    @property
    def has_parent(self) -> bool:
        """Whether this event links to a causal parent (vs. the root)."""
        return self.parent_id is not None
