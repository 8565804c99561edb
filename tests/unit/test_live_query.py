"""Tests for LiveQuery: change detection and ordered delivery."""

from __future__ import annotations

from dagscope.core.event_log import EventLog
from dagscope.core.graph_builder import build_snapshot
from dagscope.core.live_query import LiveQuery
from dagscope.models.graph import Snapshot


class TestLiveQueryRefresh:
    def test_first_refresh_delivers_empty_row_set(self, event_log: EventLog):
        received: list[list] = []
        query = LiveQuery(event_log)
        query.subscribe(received.append)

        assert query.refresh() is True
        assert received == [[]]

    def test_unchanged_log_delivers_nothing(self, event_log: EventLog):
        received: list = []
        query = LiveQuery(event_log)
        query.subscribe(received.append)

        query.refresh()
        assert query.refresh() is False
        assert len(received) == 1

    def test_force_redelivers(self, event_log: EventLog):
        received: list = []
        query = LiveQuery(event_log)
        query.subscribe(received.append)

        query.refresh()
        assert query.refresh(force=True) is True
        assert len(received) == 2

    def test_write_triggers_full_row_set(self, event_log: EventLog):
        received: list = []
        query = LiveQuery(event_log)
        query.subscribe(received.append)

        query.refresh()
        event_log.append("create", "a")
        event_log.append("modify", "b", parent_id=1)
        assert query.refresh() is True

        rows = received[-1]
        assert [r.event_id for r in rows] == [1, 2]

    def test_transform_applied_before_delivery(self, event_log: EventLog):
        event_log.append("create", "a")
        received: list[Snapshot] = []
        query: LiveQuery[Snapshot] = LiveQuery(event_log, build_snapshot)
        query.subscribe(received.append)

        query.refresh()
        assert isinstance(received[0], Snapshot)
        assert received[0].node_ids == ["ROOT", "1"]

    def test_each_delivery_is_a_new_value(self, event_log: EventLog):
        received: list[Snapshot] = []
        query: LiveQuery[Snapshot] = LiveQuery(event_log, build_snapshot)
        query.subscribe(received.append)

        query.refresh()
        query.refresh(force=True)
        assert received[0] is not received[1]
        assert received[0].structurally_equal(received[1])

    def test_current_tracks_latest_value(self, event_log: EventLog):
        query = LiveQuery(event_log)
        assert query.current is None
        event_log.append("create", "a")
        query.refresh()
        assert [r.event_id for r in query.current] == [1]


class TestLiveQuerySubscribers:
    def test_subscribers_called_in_subscription_order(self, event_log: EventLog):
        order: list[str] = []
        query = LiveQuery(event_log)
        query.subscribe(lambda _: order.append("first"))
        query.subscribe(lambda _: order.append("second"))

        query.refresh()
        assert order == ["first", "second"]

    def test_unsubscribe_stops_delivery(self, event_log: EventLog):
        received: list = []
        query = LiveQuery(event_log)
        unsubscribe = query.subscribe(received.append)

        query.refresh()
        unsubscribe()
        event_log.append("create", "a")
        query.refresh()
        assert len(received) == 1

    def test_unsubscribe_twice_is_harmless(self, event_log: EventLog):
        query = LiveQuery(event_log)
        unsubscribe = query.subscribe(lambda _: None)
        unsubscribe()
        unsubscribe()

    def test_late_subscriber_receives_current_value(self, event_log: EventLog):
        event_log.append("create", "a")
        query = LiveQuery(event_log)
        query.refresh()

        received: list = []
        query.subscribe(received.append)
        assert len(received) == 1
        assert [r.event_id for r in received[0]] == [1]

    def test_subscriber_before_first_read_gets_nothing_yet(self, event_log: EventLog):
        received: list = []
        LiveQuery(event_log).subscribe(received.append)
        assert received == []
