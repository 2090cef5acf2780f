# tests/unit/test_analytics.py
# Unit tests for per-operator session statistics

from app.services.analytics import Analytics, compute_analytics
from app.services.timer_store import SessionHistoryStore, SessionRecord, TimerStatus


def _record(operator_id, conversation_id, duration, session_id="s"):
    return SessionRecord(
        operator_id=operator_id,
        conversation_id=conversation_id,
        session_id=session_id,
        start_time=0,
        last_update=duration or 0,
        status=TimerStatus.STOPPED,
        total_elapsed=duration or 0,
        final_duration=duration,
        end_time=duration,
    )


def _history(*records):
    store = SessionHistoryStore()
    for record in records:
        store.append(record)
    return store


# * Test aggregate figures
class TestComputeAnalytics:

    def test_no_sessions_reports_zeros(self):
        result = compute_analytics(SessionHistoryStore(), "a")

        assert result == Analytics(0, 0, 0, 0)

    def test_odd_count(self):
        store = _history(
            _record("a", "c1", 30000),
            _record("a", "c2", 10000),
            _record("a", "c1", 20000),
        )

        result = compute_analytics(store, "a")
        assert result.total_sessions == 3
        assert result.total_time == 60000
        assert result.average_time == 20000
        assert result.median_time == 20000

    def test_even_count_uses_upper_median(self):
        store = _history(_record("a", "c1", 10000), _record("a", "c2", 30000))

        result = compute_analytics(store, "a")
        assert result.median_time == 30000
        assert result.average_time == 20000

    def test_only_counts_requested_operator(self):
        store = _history(
            _record("a", "c1", 1000),
            _record("ab", "c1", 5000),
            _record("a_b", "c1", 7000),
        )

        result = compute_analytics(store, "a")
        assert result.total_sessions == 1
        assert result.total_time == 1000

    def test_records_without_duration_are_skipped(self):
        store = _history(_record("a", "c1", None), _record("a", "c1", 4000))

        result = compute_analytics(store, "a")
        assert result.total_sessions == 1
        assert result.median_time == 4000

    def test_zero_length_session_is_counted(self):
        store = _history(_record("a", "c1", 0), _record("a", "c1", 4000))

        result = compute_analytics(store, "a")
        assert result.total_sessions == 2
        assert result.median_time == 4000


# * Test analytics through the controller
def test_controller_analytics_reflects_each_stop(controller):
    controller.start("a", "c1", 0)
    controller.stop_timer("a", "c1", 10000)
    assert controller.analytics("a").total_sessions == 1

    controller.start("a", "c2", 0)
    controller.stop_timer("a", "c2", 20000)
    result = controller.analytics("a")
    assert result.total_sessions == 2
    assert result.total_time == 30000
