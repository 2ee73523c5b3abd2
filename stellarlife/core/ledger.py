"""
Ledger subsystem responsible for end-of-life bookkeeping.

The ledger applies the one-shot transitions of the life-cycle model and
keeps an auditable history of the events emitted by each integration
step. It owns the supernova eligibility rule: a star whose initial mass
is at or above the supergiant threshold starts exactly one supernova when
it ends, and ``had_supernova`` guarantees the event is never re-triggered.

Events are returned to the caller of ``TimeIntegrator.advance``; the
``history`` list is a bounded record for tooling and tests.
"""

from __future__ import annotations

import logging
from typing import List

from .config import EngineConfig
from .types import EventType, LifecycleEvent

logger = logging.getLogger(__name__)


class Ledger:
    """Apply end-of-life transitions and record life-cycle events."""

    def __init__(self, config: EngineConfig):
        self.cfg = config
        self.history: List[LifecycleEvent] = []
        self.supernova_count: int = 0

    def supernova_eligible(self, star) -> bool:
        """Return True if ending ``star`` now would start a supernova."""
        return star.mass_initial >= self.cfg.supergiant_min and not star.had_supernova

    def end_of_life(self, star, index: int, step: int) -> LifecycleEvent:
        """Freeze ``star`` at the end of its life and return the event.

        Age is clamped to ``t_total`` exactly; the collapse transition
        starts from zero progress.
        """
        star.age = star.t_total
        star.ended = True
        star.collapse_animating = True
        star.collapse_progress = 0.0
        star.just_ended = True
        supernova = self.supernova_eligible(star)
        if supernova:
            star.had_supernova = True
            self.supernova_count += 1
        logger.info(
            "star %d ended at %.3e yr as %s%s",
            index, star.age, star.fate.label, " (supernova)" if supernova else "",
        )
        return LifecycleEvent(
            type=EventType.END_OF_LIFE,
            star_index=index,
            step=step,
            age=star.age,
            supernova=supernova,
            fate=star.fate,
        )

    def advance_collapse(self, star, index: int, step: int, dt_ms: float):
        """Advance an ended star's collapse transition by ``dt_ms``.

        Returns a COLLAPSE_COMPLETE event on the step the transition
        finishes, otherwise ``None``.
        """
        if not (star.ended and star.collapse_animating):
            return None
        duration = self.cfg.collapse_duration_ms
        rate = 1.0 / duration if duration > 0 else float("inf")
        star.collapse_progress = min(1.0, star.collapse_progress + max(dt_ms, 0.0) * rate)
        if star.collapse_progress < 1.0:
            return None
        star.collapse_animating = False
        logger.info("star %d collapse complete (%s)", index, star.fate.label)
        return LifecycleEvent(
            type=EventType.COLLAPSE_COMPLETE,
            star_index=index,
            step=step,
            age=star.age,
            fate=star.fate,
        )

    def record(self, events: List[LifecycleEvent]) -> None:
        self.history.extend(events)

    def finalize_tick(self, step: int) -> None:
        """End-of-step housekeeping: trim the event history to its cap."""
        overflow = len(self.history) - self.cfg.event_history_max
        if overflow > 0:
            del self.history[:overflow]

    def clear(self) -> None:
        """Forget all recorded events, as when a session restarts."""
        self.history.clear()
        self.supernova_count = 0
