# scheduler.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol


class Cancellable(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def schedule_repeating(self, period_ms: int, callback: Callable[[], None]) -> Cancellable: ...


@dataclass(eq=False)
class RepeatingJob:
    period_ms: int
    callback: Callable[[], None]
    next_due: int
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class PollingScheduler:
    """
    Scheduler fed by a clock the host already owns (e.g. pygame.time.get_ticks).

    Call `poll()` once per frame. Jobs scheduled between polls (a resume from
    an input handler) count their first period from `clock()`, not from the
    last poll. A job that fell several periods behind fires once and then
    realigns to `now + period`, so ticks never pile up.
    """
    now_ms: int = 0
    jobs: List[RepeatingJob] = field(default_factory=list)
    clock: Optional[Callable[[], int]] = None

    def current_ms(self) -> int:
        if self.clock is not None:
            self.now_ms = self.clock()
        return self.now_ms

    def schedule_repeating(self, period_ms: int, callback: Callable[[], None]) -> RepeatingJob:
        if period_ms <= 0:
            raise ValueError(f"period_ms must be positive, got {period_ms}")
        job = RepeatingJob(period_ms, callback, next_due=self.current_ms() + period_ms)
        self.jobs.append(job)
        return job

    def poll(self, now_ms: Optional[int] = None) -> int:
        """Run every due job once. Returns how many callbacks fired."""
        now_ms = self.current_ms() if now_ms is None else now_ms
        self.now_ms = now_ms
        fired = 0
        for job in list(self.jobs):
            if job.cancelled or now_ms < job.next_due:
                continue
            job.next_due += job.period_ms
            if job.next_due <= now_ms:
                job.next_due = now_ms + job.period_ms
            job.callback()
            fired += 1
        self.jobs = [j for j in self.jobs if not j.cancelled]
        return fired


@dataclass
class ManualScheduler:
    """Deterministic scheduler for tests: time only moves through `advance()`."""
    now_ms: int = 0
    jobs: List[RepeatingJob] = field(default_factory=list)

    def schedule_repeating(self, period_ms: int, callback: Callable[[], None]) -> RepeatingJob:
        if period_ms <= 0:
            raise ValueError(f"period_ms must be positive, got {period_ms}")
        job = RepeatingJob(period_ms, callback, next_due=self.now_ms + period_ms)
        self.jobs.append(job)
        return job

    @property
    def active(self) -> List[RepeatingJob]:
        return [j for j in self.jobs if not j.cancelled]

    def advance(self, ms: int) -> int:
        """Move the clock forward, firing every due callback in time order."""
        end = self.now_ms + ms
        fired = 0
        while True:
            due = [j for j in self.active if j.next_due <= end]
            if not due:
                break
            job = min(due, key=lambda j: j.next_due)
            self.now_ms = job.next_due
            job.next_due += job.period_ms
            job.callback()
            fired += 1
        self.now_ms = end
        self.jobs = self.active
        return fired
