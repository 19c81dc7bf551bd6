"""
GRAPHGEN EVENT LOGGER - A Trace of Every Generation Run

Records what the engine decided while building and checking a graph:
which structural family was chosen, how the density pass went, how edges
were annotated and what the validator concluded.

Architecture:
- GenerationEvent: One msgspec record per decision
- EventBuffer: Thread-safe in-memory ring buffer for recent events
- GenerationLogger: Core logging interface, also forwards to stdlib logging
- configure_logging(): stdlib handler setup from config

Usage:
    gen_log = get_generation_logger()
    gen_log.log_structure_selected("tree", "undirected, acyclic, connected", 10, seed=42)

    for event in gen_log.get_events(GenerationEventType.STRUCTURE_SELECTED):
        print(f"{event.sequence}: {event.family}")
"""
import msgspec
import logging
from typing import Optional, Dict, List, Any, Callable
from datetime import datetime, timezone
from enum import Enum
from collections import deque
import threading

from infrastructure.config_graph import get_settings

logger = logging.getLogger(__name__)


# =============================================================================
# EVENTS
# =============================================================================

class GenerationEventType(str, Enum):
    STRUCTURE_SELECTED = "structure_selected"
    DENSITY_PASS = "density_pass"
    ANNOTATION = "annotation"
    VALIDATION_SUMMARY = "validation_summary"
    VALIDATION_FAILURE = "validation_failure"


class GenerationEvent(msgspec.Struct, kw_only=True, frozen=True):
    timestamp: str
    sequence: int
    event_type: str
    family: Optional[str] = None
    spec_summary: Optional[str] = None
    node_count: Optional[int] = None
    edge_count: Optional[int] = None
    seed: Optional[int] = None
    property: Optional[str] = None
    message: Optional[str] = None
    details: Dict[str, Any] = msgspec.field(default_factory=dict)


# =============================================================================
# EVENT BUFFER
# =============================================================================

class EventBuffer:
    """
    Thread-safe ring buffer for recent generation events.

    Provides O(1) append and O(n) query by type.
    """

    def __init__(self, max_size: int = 10000):
        self._buffer: deque[GenerationEvent] = deque(maxlen=max_size)
        self._lock = threading.RLock()
        self._sequence = 0

    def append(self, event: GenerationEvent) -> None:
        with self._lock:
            self._buffer.append(event)

    def get_all(self) -> List[GenerationEvent]:
        with self._lock:
            return list(self._buffer)

    def get_last(self, n: int) -> List[GenerationEvent]:
        """Get the last n events."""
        with self._lock:
            items = list(self._buffer)
            return items[-n:] if len(items) >= n else items

    def get_by_type(self, event_type: str) -> List[GenerationEvent]:
        with self._lock:
            return [e for e in self._buffer if e.event_type == event_type]

    def next_sequence(self) -> int:
        with self._lock:
            self._sequence += 1
            return self._sequence

    def clear(self) -> None:
        with self._lock:
            self._buffer.clear()
            self._sequence = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)


# =============================================================================
# GENERATION LOGGER (Main Interface)
# =============================================================================

class GenerationLogger:
    """
    Records generation and validation decisions.

    Every event goes to the in-memory buffer, to the stdlib logger at DEBUG
    (INFO for validation failures) and to any subscribers.
    """

    def __init__(self, buffer_size: Optional[int] = None):
        if buffer_size is None:
            buffer_size = get_settings().logging.event_buffer_size
        self._buffer = EventBuffer(buffer_size)
        self._subscribers: List[Callable[[GenerationEvent], None]] = []

    def _now(self) -> str:
        return datetime.now(timezone.utc).isoformat()

    def _emit(self, event: GenerationEvent) -> GenerationEvent:
        self._buffer.append(event)

        level = logging.INFO if event.event_type == GenerationEventType.VALIDATION_FAILURE.value else logging.DEBUG
        logger.log(level, "%s %s", event.event_type, msgspec.json.encode(event).decode())

        for subscriber in self._subscribers:
            try:
                subscriber(event)
            except Exception as e:
                logger.warning("Event subscriber failed: %s", e)
        return event

    def _event(self, event_type: GenerationEventType, **fields: Any) -> GenerationEvent:
        return GenerationEvent(
            timestamp=self._now(),
            sequence=self._buffer.next_sequence(),
            event_type=event_type.value,
            **fields,
        )

    # =========================================================================
    # LOGGING METHODS
    # =========================================================================

    def log_structure_selected(
        self,
        family: str,
        spec_summary: str,
        node_count: int,
        seed: Optional[int] = None,
    ) -> GenerationEvent:
        """Log which structural family the dispatch table chose."""
        return self._emit(self._event(
            GenerationEventType.STRUCTURE_SELECTED,
            family=family,
            spec_summary=spec_summary,
            node_count=node_count,
            seed=seed,
        ))

    def log_density_pass(
        self,
        family: str,
        edges_before: int,
        edges_after: int,
        target_edges: Optional[int] = None,
        attempts: int = 0,
        skipped: bool = False,
    ) -> GenerationEvent:
        """Log the outcome of the density-adjustment pass."""
        return self._emit(self._event(
            GenerationEventType.DENSITY_PASS,
            family=family,
            edge_count=edges_after,
            details={
                "edges_before": edges_before,
                "target_edges": target_edges,
                "attempts": attempts,
                "skipped": skipped,
            },
        ))

    def log_annotation(
        self,
        edge_count: int,
        weighted: bool,
        typed: bool,
    ) -> GenerationEvent:
        """Log weight / edge-type annotation."""
        return self._emit(self._event(
            GenerationEventType.ANNOTATION,
            edge_count=edge_count,
            details={"weighted": weighted, "typed": typed},
        ))

    def log_validation(
        self,
        spec_summary: str,
        valid: bool,
        checked: int,
        failed: int,
        skipped: int,
    ) -> GenerationEvent:
        """Log a validation summary."""
        return self._emit(self._event(
            GenerationEventType.VALIDATION_SUMMARY,
            spec_summary=spec_summary,
            details={"valid": valid, "checked": checked, "failed": failed, "skipped": skipped},
        ))

    def log_validation_failure(
        self,
        property: str,
        expected: str,
        actual: str,
        message: Optional[str] = None,
    ) -> GenerationEvent:
        """Log a single failed property check."""
        return self._emit(self._event(
            GenerationEventType.VALIDATION_FAILURE,
            property=property,
            message=message,
            details={"expected": expected, "actual": actual},
        ))

    # =========================================================================
    # QUERY
    # =========================================================================

    def get_events(self, event_type: Optional[GenerationEventType] = None) -> List[GenerationEvent]:
        """Get buffered events, optionally filtered by type."""
        if event_type is None:
            return self._buffer.get_all()
        return self._buffer.get_by_type(GenerationEventType(event_type).value)

    def get_recent_events(self, n: int = 100) -> List[GenerationEvent]:
        return self._buffer.get_last(n)

    def clear(self) -> None:
        self._buffer.clear()

    # =========================================================================
    # SUBSCRIPTION
    # =========================================================================

    def subscribe(self, callback: Callable[[GenerationEvent], None]) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[GenerationEvent], None]) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

# Global logger instance
_global_logger: Optional[GenerationLogger] = None


def get_generation_logger() -> GenerationLogger:
    """Get or create the global generation logger."""
    global _global_logger
    if _global_logger is None:
        _global_logger = GenerationLogger()
    return _global_logger


def reset_generation_logger() -> None:
    global _global_logger
    _global_logger = None


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure stdlib logging for the engine.

    Args:
        level: Level name; defaults to [logging].level from graphgen.toml
    """
    level_name = (level or get_settings().logging.level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
