"""
Time integrator: advances star ages and resolves per-step transitions.

One call to ``TimeIntegrator.step`` runs a complete logical tick:

1. Clear the ``just_ended`` flags left by the previous step.
2. Age every active star by ``dt_years``. A star whose age reaches its
   total lifetime is clamped to ``t_total`` and handed to the ledger for
   its end-of-life transition. A star that had already ended instead
   advances its collapse transition by ``dt_ms`` of wall-clock time.
3. Apply binary Roche-lobe overflow with the same ``dt_years`` (binary
   mode only). Transfer happens after aging.
4. Return the emitted events and let the ledger trim its history.

``set_age`` is an independent entry point used for timeline scrubbing. It
assigns ages directly and never replays mass transfer or end-of-life side
effects for the skipped interval, and leaves ended stars untouched.
"""

from __future__ import annotations

import logging
from typing import List

from .context import SimulationContext
from .ledger import Ledger
from .types import LifecycleEvent, clamp

logger = logging.getLogger(__name__)


class TimeIntegrator:
    """Advance the stars of a ``SimulationContext`` through simulated time."""

    def __init__(self, context: SimulationContext, ledger: Ledger):
        self.context = context
        self.ledger = ledger

    def step(self, dt_years: float, dt_ms: float = 0.0) -> List[LifecycleEvent]:
        """Execute one integration step and return its events."""
        ctx = self.context
        ctx.step += 1
        step = ctx.step
        events: List[LifecycleEvent] = []
        dt_years = max(0.0, dt_years)

        for star in ctx.stars:
            star.just_ended = False

        for index in ctx.active_indices():
            star = ctx.stars[index]
            if not star.ended:
                star.age += dt_years
                if star.age >= star.t_total:
                    events.append(self.ledger.end_of_life(star, index, step))
            else:
                done = self.ledger.advance_collapse(star, index, step, dt_ms)
                if done is not None:
                    events.append(done)

        if ctx.binary_enabled:
            transfer = ctx.binary.transfer(dt_years, step)
            if transfer is not None:
                events.append(transfer)

        self.ledger.record(events)
        self.ledger.finalize_tick(step)
        return events

    def set_age(self, age_years: float) -> None:
        """Assign the age of the primary (and the secondary in binary mode).

        Each age is clamped to ``[0, t_total]`` of its own star. An ended
        star is terminal and keeps its age frozen at ``t_total``; a star
        scrubbed to its end is only ended by the next ``step``.
        """
        ctx = self.context
        for index in ctx.active_indices():
            star = ctx.stars[index]
            if star.ended:
                continue
            star.age = clamp(float(age_years), 0.0, star.t_total)
        logger.debug("scrubbed to %.3e yr", ctx.primary.age)
