"""
Star record and construction.

A ``Star`` holds one stellar body's evolving physical and life-cycle
state. Stars are never edited incrementally: setting an initial mass
builds a fresh record with age zero and all derived durations computed
from the clamped mass. The only in-place mutations come from the time
integrator (age, end-of-life flags, collapse progress) and from binary
mass transfer (current mass, fate and durations).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .config import EngineConfig
from .types import Fate, clamp
from ..domains.stellar import relations

logger = logging.getLogger(__name__)


@dataclass
class Star:
    """Evolving state of a single star.

    Attributes:
        mass_initial: Mass at construction (solar masses), clamped to the
            configured domain. Decides the giant/supergiant branch.
        mass_current: Mass after any transfer; drives every derived value.
        age: Simulated age in years.
        t_protostar: Protostellar phase duration (years).
        t_ms: Main-sequence duration (years).
        t_giant: Post-main-sequence duration (years).
        t_total: Sum of the three phase durations.
        fate: Compact object the star will leave, from current mass.
        ended: True once age reached ``t_total``.
        collapse_animating: Visual collapse transition in progress.
        collapse_progress: Collapse transition progress in [0, 1].
        just_ended: Set on the step the star ended, cleared on the next.
        had_supernova: A supernova was already triggered for this star.
    """
    mass_initial: float
    mass_current: float
    t_protostar: float
    t_ms: float
    t_giant: float
    t_total: float
    fate: Fate
    age: float = 0.0
    ended: bool = False
    collapse_animating: bool = False
    collapse_progress: float = 0.0
    just_ended: bool = False
    had_supernova: bool = False

    def recompute(self, cfg: Optional[EngineConfig] = None) -> None:
        """Recompute fate and phase durations from ``mass_current``.

        ``age`` is left untouched, so the fractional progress
        ``age / t_total`` jumps whenever the mass changes.
        """
        self.fate = relations.fate_for_mass(self.mass_current, cfg)
        (self.t_protostar, self.t_ms, self.t_giant,
         self.t_total) = relations.phase_durations(self.mass_current, cfg)


def create_star(initial_mass: float, cfg: Optional[EngineConfig] = None) -> Star:
    """Build a fresh star of ``initial_mass`` solar masses at age zero."""
    cfg = cfg or EngineConfig()
    mass = clamp(float(initial_mass), cfg.mass_min, cfg.mass_max)
    t_protostar, t_ms, t_giant, t_total = relations.phase_durations(mass, cfg)
    star = Star(
        mass_initial=mass,
        mass_current=mass,
        t_protostar=t_protostar,
        t_ms=t_ms,
        t_giant=t_giant,
        t_total=t_total,
        fate=relations.fate_for_mass(mass, cfg),
    )
    logger.debug("created star M=%.3f t_total=%.3e yr fate=%s", mass, t_total, star.fate.label)
    return star
