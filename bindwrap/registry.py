import logging
from typing import Callable
from dataclasses import dataclass, field
from collections import defaultdict
from functools import lru_cache
from time import perf_counter
from multiprocessing import current_process

logger = logging.getLogger(__name__)


@dataclass
class Stat:
    calls: int = 0
    duration: float = 0.0
    rows: int = 0
    fails: int = 0
    fails_by_error: dict[str, int] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class QueryEvent:
    query: str
    duration: float | None
    rows: int
    error: str | None


class Registry:
    """Execution statistics by query text, and listeners of query events"""

    def __init__(self) -> None:
        self.stat_by_query: defaultdict[str, Stat] = defaultdict(Stat)
        self._event_listeners: list[Callable[[QueryEvent], None]] = []

    def add_event_listener(self, callback: Callable[[QueryEvent], None]) -> None:
        self._event_listeners.append(callback)

    def remove_event_listener(self, callback: Callable[[QueryEvent], None]) -> None:
        self._event_listeners.remove(callback)

    def on_event(self, event: QueryEvent) -> None:
        stat = self.stat_by_query[event.query]
        stat.calls += 1
        stat.duration += event.duration or 0
        stat.rows += event.rows
        if event.error:
            stat.fails += 1
            stat.fails_by_error[event.error] = (
                stat.fails_by_error.get(event.error, 0) + 1
            )

        for callback in self._event_listeners:
            try:
                callback(event)
            except Exception:
                logger.warning("Event listener %r failed", callback, exc_info=True)

    def clear_stat(self) -> None:
        self.stat_by_query.clear()


class MetricsCollector:
    """
    Context manager that reports one query execution to the registry.

    A raised exception is reported as a fail named after the exception class. A
    failure the caller handled without raising is reported with `fail()`.
    """

    def __init__(self, query: str, enabled: bool = True) -> None:
        self.registry = get_registry() if enabled else None
        self.query = query
        self.rows = 0
        self.error: str | None = None
        self.start_time: float | None = None

    def fail(self, error: BaseException | None) -> None:
        self.error = type(error).__name__ if error is not None else "Error"

    def finish(self, exc_type: type | None) -> None:
        if self.start_time is not None and self.registry is not None:
            duration = perf_counter() - self.start_time
            self.start_time = None
            self.registry.on_event(
                QueryEvent(
                    self.query,
                    duration,
                    self.rows,
                    self.error if exc_type is None else exc_type.__name__,
                )
            )

    def __enter__(self):
        self.start_time = perf_counter()
        return self

    def __exit__(self, exc_type: type | None, exc_value, traceback) -> None:
        self.finish(exc_type)


@lru_cache
def _get_registry(pid):
    return Registry()


def get_registry() -> Registry:
    return _get_registry(current_process().pid)
