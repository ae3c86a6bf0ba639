"""
Solve-time reporting.

The solver only ever calls `Reporter.record(name, seconds)` after a solve
completed; what happens with the value is up to the reporter.
"""
import threading
from abc import ABC, abstractmethod
from typing import Dict


class Reporter(ABC):
    @abstractmethod
    def record(self, name: str, seconds: float) -> None:
        ...


class NullReporter(Reporter):
    def record(self, name: str, seconds: float) -> None:
        pass


class Timer:
    """Running statistics for one metric name."""

    def __init__(self):
        self.count = 0
        self.total = 0.0
        self.max = 0.0

    def update(self, seconds: float):
        self.count += 1
        self.total += seconds
        if seconds > self.max:
            self.max = seconds

    @property
    def mean(self) -> float:
        return self.total / self.count if self.count else 0.0


class TimerRegistry(Reporter):
    """In-memory registry of named timers; safe to share between threads."""

    def __init__(self):
        self._timers: Dict[str, Timer] = {}
        self._lock = threading.Lock()

    def timer(self, name: str) -> Timer:
        with self._lock:
            if name not in self._timers:
                self._timers[name] = Timer()
            return self._timers[name]

    def record(self, name: str, seconds: float) -> None:
        timer = self.timer(name)
        with self._lock:
            timer.update(seconds)

    def snapshot(self) -> Dict[str, Dict[str, float]]:
        with self._lock:
            return {
                name: {'count': t.count, 'total': t.total, 'mean': t.mean, 'max': t.max}
                for name, t in self._timers.items()
            }
