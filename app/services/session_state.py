"""
Client session bookkeeping.

Tracks which skill or project a UI is editing and keeps a short window of
operation timings. Observers register explicitly and are told about every
editing-state change.
"""

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from threading import Lock

from app.utils.helpers import utc_now

MAX_SAMPLES: int = 100

type Observer = Callable[[str, int | None, int | None], None]


@dataclass(frozen=True, slots=True)
class OperationSample:
    """One timed operation."""

    name: str
    duration_ms: float
    cache_hit: bool
    recorded_at: datetime


@dataclass
class SessionState:
    """
    Editing pointers and recent operation timings for one client session.

    Observers are called with ``(property, old_id, new_id)`` where property
    is ``"EditingSkill"`` or ``"EditingProject"``.
    """

    editing_skill_id: int | None = None
    editing_skill_name: str | None = None
    last_edited_skill: datetime | None = None
    editing_project_id: int | None = None
    editing_project_title: str | None = None
    last_edited_project: datetime | None = None
    max_samples: int = MAX_SAMPLES
    _samples: deque[OperationSample] = field(default_factory=deque, init=False, repr=False)
    _observers: list[Observer] = field(default_factory=list, init=False, repr=False)
    _lock: Lock = field(default_factory=Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self._samples = deque(maxlen=self.max_samples)

    def subscribe(self, callback: Observer) -> Callable[[], None]:
        """
        Register an observer.

        Returns:
            A callable that removes the observer again; calling it twice is harmless.
        """
        with self._lock:
            self._observers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._observers:
                    self._observers.remove(callback)

        return unsubscribe

    def _notify(self, prop: str, old: int | None, new: int | None) -> None:
        with self._lock:
            observers = list(self._observers)
        for observer in observers:
            observer(prop, old, new)

    @property
    def is_editing_skill(self) -> bool:
        return self.editing_skill_id is not None

    @property
    def is_editing_project(self) -> bool:
        return self.editing_project_id is not None

    def set_editing_skill(self, skill_id: int | None, name: str | None = None) -> None:
        previous = self.editing_skill_id
        self.editing_skill_id = skill_id
        self.editing_skill_name = name
        self.last_edited_skill = utc_now() if skill_id is not None else None
        self._notify("EditingSkill", previous, skill_id)

    def clear_editing_skill(self) -> None:
        self.set_editing_skill(None)

    def set_editing_project(self, project_id: int | None, title: str | None = None) -> None:
        previous = self.editing_project_id
        self.editing_project_id = project_id
        self.editing_project_title = title
        self.last_edited_project = utc_now() if project_id is not None else None
        self._notify("EditingProject", previous, project_id)

    def clear_editing_project(self) -> None:
        self.set_editing_project(None)

    def record_operation(self, name: str, duration_ms: float, *, cache_hit: bool = False) -> None:
        """Keep a timing sample; the oldest one is dropped past ``max_samples``."""
        sample = OperationSample(name, duration_ms, cache_hit, utc_now())
        with self._lock:
            self._samples.append(sample)

    @property
    def samples(self) -> tuple[OperationSample, ...]:
        with self._lock:
            return tuple(self._samples)

    def cache_hit_ratio(self) -> float:
        """Share of recorded operations served from cache, between 0 and 1."""
        samples = self.samples
        if not samples:
            return 0.0
        return sum(1 for s in samples if s.cache_hit) / len(samples)

    def average_duration_ms(self, name: str | None = None) -> float:
        """Mean duration, optionally restricted to one operation name."""
        durations = [s.duration_ms for s in self.samples if name is None or s.name == name]
        return sum(durations) / len(durations) if durations else 0.0

    def slowest(self, n: int = 5) -> list[OperationSample]:
        return sorted(self.samples, key=lambda s: s.duration_ms, reverse=True)[:n]

    def clear_samples(self) -> None:
        with self._lock:
            self._samples.clear()
