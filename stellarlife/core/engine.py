"""
Engine facade exposing the stellar life core to its collaborators.

Renderers, UI layers and drivers talk to a single ``StellarEngine`` which
wires together the simulation context, the ledger, the time integrator
and the simulation clock. The engine never blocks or sleeps: the host
owns the real-time loop and calls ``tick`` (or ``next_clock_tick`` and
``advance`` separately) once per frame.

Scrubbing is serialised against the running loop. Between
``begin_scrub`` and ``end_scrub`` the frame-driven ``advance`` is
suspended, so ``set_age`` is the only writer of star ages.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .clock import AUTO, SimulationClock
from .config import MYR, EngineConfig
from .context import PRIMARY, SECONDARY, SimulationContext
from .integrator import TimeIntegrator
from .ledger import Ledger
from .star import Star, create_star
from .types import LifecycleEvent
from ..domains.stellar import lifecycle, relations

logger = logging.getLogger(__name__)


class StellarEngine:
    """Single- and binary-star evolution engine for one session."""

    def __init__(self, config: Optional[EngineConfig] = None,
                 primary_mass: Optional[float] = None,
                 secondary_mass: Optional[float] = None):
        self.cfg = config or EngineConfig()
        self.context = SimulationContext(self.cfg, primary_mass, secondary_mass)
        self.ledger = Ledger(self.cfg)
        self.integrator = TimeIntegrator(self.context, self.ledger)
        self.clock = SimulationClock(self.cfg)

    # ------------------------------------------------------------------
    # Star construction and projection

    def create_star(self, initial_mass: float) -> Star:
        return create_star(initial_mass, self.cfg)

    def derive_display(self, star: Star) -> lifecycle.DisplayState:
        return lifecycle.derive_display(star, self.cfg)

    def final_compact_radius(self, star: Star) -> float:
        return relations.final_compact_radius(star, self.cfg)

    @property
    def primary(self) -> Star:
        return self.context.primary

    @property
    def secondary(self) -> Star:
        return self.context.secondary

    def set_primary_mass(self, initial_mass: float) -> Star:
        """Replace the primary with a fresh star of ``initial_mass``.

        Outside binary mode the secondary is rebuilt from its current mass
        as well, so it restarts alongside the primary.
        """
        star = self.context.replace_star(PRIMARY, initial_mass)
        if not self.context.binary_enabled:
            self.context.replace_star(SECONDARY, self.context.secondary.mass_current)
        logger.info("primary set to %.3f Msun", star.mass_initial)
        return star

    def set_secondary_mass(self, initial_mass: float) -> Star:
        star = self.context.replace_star(SECONDARY, initial_mass)
        logger.info("secondary set to %.3f Msun", star.mass_initial)
        return star

    def reset(self) -> None:
        """Rebuild both stars from their initial masses, clear the ledger and pause."""
        ctx = self.context
        ctx.replace_star(PRIMARY, ctx.primary.mass_initial)
        ctx.replace_star(SECONDARY, ctx.secondary.mass_initial)
        self.ledger.clear()
        ctx.step = 0
        self.pause()

    # ------------------------------------------------------------------
    # Binary configuration

    def configure_binary(self, enabled: bool, separation_au: Optional[float] = None,
                         transfer_rate_per_year: Optional[float] = None) -> None:
        """Update binary mode and its parameters.

        Disabling binary mode leaves the secondary's state untouched; it
        only stops taking part in ``advance``.
        """
        ctx = self.context
        ctx.binary_enabled = bool(enabled)
        if separation_au is not None:
            ctx.binary.set_separation(separation_au)
        if transfer_rate_per_year is not None:
            ctx.binary.set_transfer_rate(transfer_rate_per_year)
        logger.debug(
            "binary=%s a=%.3f AU rate=%.3e Msun/yr",
            ctx.binary_enabled, ctx.binary.separation_au, ctx.binary.transfer_rate_per_year,
        )

    def set_transfer_rate_per_myr(self, rate_per_myr: float) -> None:
        self.context.binary.set_transfer_rate(rate_per_myr / MYR)

    # ------------------------------------------------------------------
    # Time

    def next_clock_tick(self, dt_ms: float, mode: str = AUTO,
                        speed_multiplier: Optional[float] = None) -> float:
        """Return ``dt_years`` for a frame of ``dt_ms`` under ``mode``."""
        speed = self.context.speed if speed_multiplier is None else speed_multiplier
        return self.clock.years_for(dt_ms, mode, self.context.primary.t_total, speed)

    def advance(self, dt_years: float, dt_ms: float = 0.0) -> List[LifecycleEvent]:
        """Advance the active stars; a no-op while a scrub is in progress."""
        if self.context.scrubbing:
            return []
        return self.integrator.step(dt_years, dt_ms)

    def set_age(self, age_years: float) -> None:
        self.integrator.set_age(age_years)

    def begin_scrub(self) -> None:
        self.context.scrubbing = True

    def end_scrub(self) -> None:
        self.context.scrubbing = False
        self.clock.reset()

    def play(self) -> None:
        self.context.running = True
        self.clock.reset()

    def pause(self) -> None:
        self.context.running = False

    def tick(self, timestamp_ms: float) -> List[LifecycleEvent]:
        """Run one driver frame: clock, integrate, transfer.

        Does nothing while paused or scrubbing.
        """
        ctx = self.context
        if not ctx.running or ctx.scrubbing:
            return []
        dt_ms = self.clock.frame_delta(timestamp_ms)
        dt_years = self.next_clock_tick(dt_ms, ctx.clock_mode)
        return self.advance(dt_years, dt_ms)

    # ------------------------------------------------------------------
    # Renderer view

    def snapshot(self) -> dict:
        """Return the public state of every star for a renderer."""
        ctx = self.context
        out = {"binary": ctx.binary_enabled, "running": ctx.running, "step": ctx.step, "stars": []}
        for index, star in enumerate(ctx.stars):
            display = self.derive_display(star)
            out["stars"].append({
                "index": index,
                "active": index in ctx.active_indices(),
                "mass": star.mass_current,
                "age": star.age,
                "t_total": star.t_total,
                "progress": lifecycle.progress(star),
                "fate": star.fate.label,
                "stage": display.stage_label,
                "luminosity": display.luminosity,
                "radius": display.radius,
                "temperature_k": display.temperature_k,
                "visual_radius": lifecycle.visual_radius(star, self.cfg),
                "just_ended": star.just_ended,
                "had_supernova": star.had_supernova,
            })
        if ctx.binary_enabled:
            out["lobes"] = [
                {"index": s.star_index, "roche_lobe_au": s.roche_lobe_au, "overfills": s.overfills}
                for s in ctx.binary.lobe_states()
            ]
        return out
