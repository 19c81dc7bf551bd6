"""
Unit tests for infrastructure/logger.py - Generation Event Logger

Tests:
- EventBuffer ring semantics and queries
- Each log_* method's event fields
- Type filtering and recent-event queries
- Subscribers (including a failing one)
- configure_logging level resolution
"""
import logging

from infrastructure.logger import (
    EventBuffer,
    GenerationEvent,
    GenerationEventType,
    GenerationLogger,
    configure_logging,
    get_generation_logger,
    reset_generation_logger,
)


def _event(sequence, event_type="density_pass"):
    return GenerationEvent(timestamp="t", sequence=sequence, event_type=event_type)


# =============================================================================
# EVENT BUFFER
# =============================================================================

class TestEventBuffer:
    """Tests for EventBuffer."""

    def test_ring_drops_oldest(self):
        buffer = EventBuffer(max_size=3)
        for i in range(5):
            buffer.append(_event(i))

        assert len(buffer) == 3
        assert [e.sequence for e in buffer.get_all()] == [2, 3, 4]

    def test_get_last(self):
        buffer = EventBuffer()
        for i in range(4):
            buffer.append(_event(i))

        assert [e.sequence for e in buffer.get_last(2)] == [2, 3]
        assert len(buffer.get_last(10)) == 4

    def test_get_by_type(self):
        buffer = EventBuffer()
        buffer.append(_event(1, "annotation"))
        buffer.append(_event(2, "density_pass"))

        assert [e.sequence for e in buffer.get_by_type("annotation")] == [1]

    def test_sequence_and_clear(self):
        buffer = EventBuffer()
        assert buffer.next_sequence() == 1
        assert buffer.next_sequence() == 2

        buffer.append(_event(1))
        buffer.clear()
        assert len(buffer) == 0
        assert buffer.next_sequence() == 1


# =============================================================================
# GENERATION LOGGER
# =============================================================================

class TestGenerationLogger:
    """Tests for GenerationLogger."""

    def test_structure_selected(self):
        gen_log = GenerationLogger(buffer_size=100)
        event = gen_log.log_structure_selected("tree", "undirected, acyclic, connected", 10, seed=42)

        assert event.event_type == GenerationEventType.STRUCTURE_SELECTED.value
        assert (event.family, event.node_count, event.seed) == ("tree", 10, 42)
        assert event.sequence == 1

    def test_density_pass_details(self):
        gen_log = GenerationLogger(buffer_size=100)
        event = gen_log.log_density_pass("default", 9, 18, target_edges=18, attempts=12)

        assert event.edge_count == 18
        assert event.details == {"edges_before": 9, "target_edges": 18, "attempts": 12, "skipped": False}

    def test_validation_events(self):
        """
        Summary and failure events carry their counts and values.

        Verifies:
        - Failure records expected / actual in details
        - Summary records checked / failed / skipped
        """
        gen_log = GenerationLogger(buffer_size=100)
        failure = gen_log.log_validation_failure("cycles", "acyclic", "has cycles", "Cycle found")
        summary = gen_log.log_validation("undirected, acyclic", False, 40, 1, 3)

        assert failure.property == "cycles"
        assert failure.details == {"expected": "acyclic", "actual": "has cycles"}
        assert summary.details == {"valid": False, "checked": 40, "failed": 1, "skipped": 3}

    def test_filter_by_type(self):
        gen_log = GenerationLogger(buffer_size=100)
        gen_log.log_annotation(5, True, False)
        gen_log.log_density_pass("default", 1, 2)
        gen_log.log_annotation(7, False, True)

        annotations = gen_log.get_events(GenerationEventType.ANNOTATION)
        assert [e.edge_count for e in annotations] == [5, 7]
        assert len(gen_log.get_events()) == 3
        assert len(gen_log.get_events("density_pass")) == 1
        assert [e.sequence for e in gen_log.get_recent_events(2)] == [2, 3]

    def test_subscribers(self):
        gen_log = GenerationLogger(buffer_size=100)
        received = []

        def failing(event):
            raise RuntimeError("subscriber down")

        gen_log.subscribe(failing)
        gen_log.subscribe(received.append)
        gen_log.log_annotation(1, True, False)

        assert len(received) == 1
        assert len(gen_log.get_events()) == 1

        gen_log.unsubscribe(received.append)
        gen_log.log_annotation(2, True, False)
        assert len(received) == 1

    def test_failures_logged_at_info(self, caplog):
        gen_log = GenerationLogger(buffer_size=100)
        with caplog.at_level(logging.INFO, logger="infrastructure.logger"):
            gen_log.log_validation_failure("density", "sparse", "dense")
            gen_log.log_annotation(1, True, False)

        messages = [r.getMessage() for r in caplog.records]
        assert len(messages) == 1
        assert messages[0].startswith("validation_failure")

    def test_clear(self):
        gen_log = GenerationLogger(buffer_size=100)
        gen_log.log_annotation(1, True, False)
        gen_log.clear()
        assert gen_log.get_events() == []


# =============================================================================
# GLOBAL ACCESS
# =============================================================================

def test_global_logger_singleton():
    first = get_generation_logger()
    assert get_generation_logger() is first

    reset_generation_logger()
    assert get_generation_logger() is not first


def test_configure_logging_level(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))

    configure_logging("debug")
    assert calls["level"] == logging.DEBUG

    configure_logging()
    assert calls["level"] == logging.WARNING
