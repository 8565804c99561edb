"""LiveQuery: re-delivers the full row set whenever the event log changes.

The query is driven by its caller: each ``refresh()`` checks the log's
write counter and, when it moved, re-reads every row, applies the
optional transform and hands the result to every subscriber in
subscription order.  No diffing is done; subscribers always receive the
complete current value.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from dagscope.core.event_log import EventLog
from dagscope.models.events import EventRow

logger = logging.getLogger(__name__)

T = TypeVar("T")

Subscriber = Callable[[Any], None]


class LiveQuery(Generic[T]):
    """Polling subscription over an :class:`EventLog`.

    Parameters
    ----------
    log:
        The event log to read from.
    transform:
        Applied to the row list before delivery (e.g. ``build_snapshot``).
        When omitted subscribers receive the ``list[EventRow]`` itself.
    """

    def __init__(
        self,
        log: EventLog,
        transform: Callable[[list[EventRow]], T] | None = None,
    ) -> None:
        self._log = log
        self._transform = transform
        self._subscribers: list[Callable[[T], None]] = []
        self._revision: int | None = None
        self._current: T | None = None

    @property
    def current(self) -> T | None:
        """The most recently delivered value, or None before the first read."""
        return self._current

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register a subscriber and return a function that unsubscribes it.

        A subscriber added after the first read immediately receives the
        current value.
        """
        self._subscribers.append(callback)
        if self._revision is not None:
            callback(self._current)  # type: ignore[arg-type]

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def refresh(self, *, force: bool = False) -> bool:
        """Re-read the log if it changed and deliver the new value.

        Returns True when a value was delivered.
        """
        revision = self._log.revision()
        if not force and revision == self._revision:
            return False

        rows = self._log.fetch_rows()
        value = self._transform(rows) if self._transform else rows
        self._revision = revision
        self._current = value  # type: ignore[assignment]

        logger.debug(
            "Live query delivering %d rows (revision %d) to %d subscribers",
            len(rows),
            revision,
            len(self._subscribers),
        )
        for callback in list(self._subscribers):
            callback(value)  # type: ignore[arg-type]
        return True
