"""Causal event log backed by SQLite.

Two tables mirror the relational shape the graph is derived from:

- ``event``: payload of each event (owning item, type, value).
- ``event_dag``: causal link of each event to its parent (nullable).

Rows are read back in insertion order, kept by ``event_dag.seq`` rather
than by event id, so logs written with explicit ids keep their order.

A ``log_revision`` counter is bumped by triggers on every write to either
table, including writes from other processes, so readers can detect
change without re-reading every row.

Design:
- WAL journal mode for concurrent readers.
- One connection per operation.
- Appends take the write lock (``BEGIN IMMEDIATE``) before allocating ids.
- Payload values are stored as JSON text.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any

from dagscope.models.events import EventRow

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------

_CREATE_EVENT = """
CREATE TABLE IF NOT EXISTS event (
    id          INTEGER PRIMARY KEY,
    item_id,
    type        TEXT NOT NULL,
    value_json  TEXT NOT NULL DEFAULT 'null'
);
"""

_CREATE_EVENT_DAG = """
CREATE TABLE IF NOT EXISTS event_dag (
    seq         INTEGER PRIMARY KEY AUTOINCREMENT,
    event_id    INTEGER NOT NULL UNIQUE REFERENCES event(id),
    parent_id   INTEGER
);
"""

_CREATE_IDX_PARENT = """
CREATE INDEX IF NOT EXISTS idx_event_dag_parent ON event_dag(parent_id);
"""

_CREATE_REVISION = """
CREATE TABLE IF NOT EXISTS log_revision (
    id          INTEGER PRIMARY KEY CHECK (id = 1),
    revision    INTEGER NOT NULL
);
"""

_SEED_REVISION = "INSERT OR IGNORE INTO log_revision (id, revision) VALUES (1, 0)"

_TRIGGER_TEMPLATE = """
CREATE TRIGGER IF NOT EXISTS bump_{table}_{op}
AFTER {op} ON {table}
BEGIN
    UPDATE log_revision SET revision = revision + 1 WHERE id = 1;
END;
"""

_SELECT_ROWS = """
SELECT
    event_dag.parent_id AS parentId,
    event_dag.event_id  AS eventId,
    event.type          AS type,
    event.item_id       AS itemId,
    event.value_json    AS value
FROM event_dag
JOIN event ON event.id = event_dag.event_id
"""


class EventLogError(RuntimeError):
    """Raised when an event cannot be written to the log."""


class EventLog:
    """SQLite-backed causal event log.

    Parameters
    ----------
    db_path:
        Path to the SQLite database file.  Created if it does not exist.
    """

    def __init__(self, db_path: Path) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    @property
    def db_path(self) -> Path:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), check_same_thread=False)
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def _init_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(_CREATE_EVENT)
            conn.execute(_CREATE_EVENT_DAG)
            conn.execute(_CREATE_IDX_PARENT)
            conn.execute(_CREATE_REVISION)
            conn.execute(_SEED_REVISION)
            for table in ("event", "event_dag"):
                for op in ("INSERT", "UPDATE", "DELETE"):
                    conn.execute(_TRIGGER_TEMPLATE.format(table=table, op=op))
            conn.commit()

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def append(
        self,
        type: str,
        value: Any = None,
        *,
        item_id: int | str | None = None,
        parent_id: int | None = None,
        event_id: int | None = None,
    ) -> EventRow:
        """Append one event and its DAG link in a single transaction.

        When ``event_id`` is omitted the next id after the current maximum
        is allocated.  The parent is stored as given, even when it does
        not (yet) exist in the log.

        Raises
        ------
        EventLogError
            If the event id is already taken or cannot be stored.
        """
        try:
            value_json = json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise EventLogError(f"Event value is not JSON-serializable: {exc}") from exc

        try:
            with self._connect() as conn:
                # Take the write lock before reading MAX(id)
                conn.execute("BEGIN IMMEDIATE")
                if event_id is None:
                    row = conn.execute(
                        "SELECT COALESCE(MAX(id), 0) + 1 FROM event"
                    ).fetchone()
                    event_id = int(row[0])
                conn.execute(
                    "INSERT INTO event (id, item_id, type, value_json) VALUES (?, ?, ?, ?)",
                    (event_id, item_id, type, value_json),
                )
                conn.execute(
                    "INSERT INTO event_dag (event_id, parent_id) VALUES (?, ?)",
                    (event_id, parent_id),
                )
                conn.commit()
        except sqlite3.IntegrityError as exc:
            raise EventLogError(f"Cannot append event {event_id}: {exc}") from exc
        except OverflowError as exc:
            raise EventLogError(
                f"Event id {event_id} does not fit in a 64-bit integer"
            ) from exc

        logger.info(
            "Appended event %s (type=%s, parent=%s)", event_id, type, parent_id
        )
        return EventRow(
            event_id=event_id,
            parent_id=parent_id,
            item_id=item_id,
            type=type,
            value=value,
        )

    # ------------------------------------------------------------------
    # Query methods (read-only)
    # ------------------------------------------------------------------

    def fetch_rows(self) -> list[EventRow]:
        """Return every event joined with its DAG link, in insertion order."""
        with self._connect() as conn:
            rows = conn.execute(
                _SELECT_ROWS + " ORDER BY event_dag.seq ASC"
            ).fetchall()
        return [self._row_to_event(row) for row in rows]

    def get(self, event_id: int) -> EventRow | None:
        """Return a single event by id, or None."""
        with self._connect() as conn:
            row = conn.execute(
                _SELECT_ROWS + " WHERE event_dag.event_id = ?",
                (event_id,),
            ).fetchone()
        return self._row_to_event(row) if row else None

    def children(self, event_id: int) -> list[EventRow]:
        """Return the direct causal children of an event."""
        with self._connect() as conn:
            rows = conn.execute(
                _SELECT_ROWS
                + " WHERE event_dag.parent_id = ? ORDER BY event_dag.seq ASC",
                (event_id,),
            ).fetchall()
        return [self._row_to_event(row) for row in rows]

    def count(self) -> int:
        """Number of events in the DAG."""
        with self._connect() as conn:
            row = conn.execute("SELECT COUNT(*) FROM event_dag").fetchone()
        return int(row[0])

    def revision(self) -> int:
        """Monotonic write counter; changes whenever either table changes."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT revision FROM log_revision WHERE id = 1"
            ).fetchone()
        return int(row[0]) if row else 0

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _row_to_event(row: tuple) -> EventRow:
        """Convert a query row tuple to an EventRow."""
        parent_id, event_id, type_, item_id, value_json = row
        try:
            value = json.loads(value_json)
        except (TypeError, ValueError):
            # Written by another tool without JSON encoding
            value = value_json
        return EventRow(
            event_id=event_id,
            parent_id=parent_id,
            item_id=item_id,
            type=type_,
            value=value,
        )
