"""Query reconciliation: one canonical filter, many input surfaces."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from .log import Loggable
from .models import CanonicalFilter, PartialQuery, TimeRange

CascadeAction = Callable[[str, TimeRange], None]


@dataclass
class PendingTask:
    """Handle for a scheduled callback."""

    due_at: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


class CascadeScheduler:
    """
    Holds at most one pending task.

    Scheduling a new task cancels the previous one first. Nothing runs on
    its own: the owner calls ``run_due()`` from its event loop, which keeps
    every callback on the same thread as the state it touches.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._pending: PendingTask | None = None

    @property
    def pending(self) -> PendingTask | None:
        return self._pending

    def schedule(self, delay: float, callback: Callable[[], None]) -> PendingTask:
        self.cancel()
        self._pending = PendingTask(due_at=self._clock() + delay, callback=callback)
        return self._pending

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def time_remaining(self) -> float | None:
        """Seconds until the pending task is due, or None if nothing is pending."""
        if self._pending is None:
            return None
        return max(0.0, self._pending.due_at - self._clock())

    def run_due(self) -> bool:
        """Run the pending task if its delay has elapsed. Returns True if it ran."""
        task = self._pending
        if task is None or task.cancelled or self._clock() < task.due_at:
            return False
        self._pending = None
        task.callback()
        return True


class QueryReconciler(Loggable):
    """
    Owns the canonical filter and is the only thing allowed to change it.

    Chat extractions, map clicks, timeline drags and URL navigation all call
    ``merge``; present fields of the partial query replace the current ones,
    absent fields are left alone.
    """

    log_name = "RECONCILER"

    def __init__(
        self,
        initial: CanonicalFilter | None = None,
        baseline: TimeRange | None = None,
        scheduler: CascadeScheduler | None = None,
        cascade_delay: float = 0.3,
        on_cascade: CascadeAction | None = None,
    ) -> None:
        self.baseline = baseline or TimeRange.baseline()
        self._filter = initial or CanonicalFilter(time_range=self.baseline)
        self.scheduler = scheduler or CascadeScheduler()
        self.cascade_delay = cascade_delay
        self.on_cascade = on_cascade
        self._listeners: list[Callable[[CanonicalFilter, str], None]] = []

    @property
    def filter(self) -> CanonicalFilter:
        return self._filter

    def subscribe(self, listener: Callable[[CanonicalFilter, str], None]) -> None:
        """Call ``listener(filter, source)`` after every change."""
        self._listeners.append(listener)

    def merge(self, partial: PartialQuery, source: str = "ui") -> CanonicalFilter:
        """Overlay ``partial`` onto the canonical filter and return the result."""
        merged = self._filter.overlay(partial)
        if merged != self._filter:
            self._log_info(f"Merge from {source}: {self._filter} -> {merged}")
            self._filter = merged
            self._notify(source)
        return self._filter

    def replace(self, canonical: CanonicalFilter, source: str = "url") -> CanonicalFilter:
        """Swap in a whole filter, e.g. the state a history entry describes."""
        if canonical != self._filter:
            self._log_info(f"Replace from {source}: {self._filter} -> {canonical}")
            self._filter = canonical
            self._notify(source)
        return self._filter

    def reset(self, source: str = "ui") -> CanonicalFilter:
        """Return every field to its default, the time range to the baseline."""
        self.scheduler.cancel()
        return self.replace(CanonicalFilter(time_range=self.baseline), source)

    def maybe_cascade(self, partial: PartialQuery) -> bool:
        """
        Decide whether ``partial`` should open the results view.

        Any pending cascade is superseded. A new one is scheduled only when
        the partial carried both a location and a time range; it fires with
        the canonical filter as it stands when the delay elapses.
        """
        self.scheduler.cancel()
        if not partial.resolves_place_and_time or self.on_cascade is None:
            return False
        self._log_info(f"Cascade scheduled in {self.cascade_delay}s for {partial.location}")
        self.scheduler.schedule(self.cascade_delay, self._fire_cascade)
        return True

    def apply(self, partial: PartialQuery, source: str = "ui") -> CanonicalFilter:
        """Merge and then decide on the cascade, the usual pairing for user input."""
        merged = self.merge(partial, source)
        self.maybe_cascade(partial)
        return merged

    def run_pending(self) -> bool:
        return self.scheduler.run_due()

    def _notify(self, source: str) -> None:
        for listener in self._listeners:
            listener(self._filter, source)

    def _fire_cascade(self) -> None:
        current = self._filter
        if current.location is None or self.on_cascade is None:
            return
        self._log_info(f"Cascade firing for {current.location} ({current.time_range})")
        self.on_cascade(current.location, current.time_range)
