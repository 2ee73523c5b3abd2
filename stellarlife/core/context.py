"""
Simulation context: the state of one simulation session.

The context exclusively owns both star records and the binary policy
object that refers to them by index. It replaces any notion of global
simulation state: the driver creates one context per session and passes
it to the integrator, the clock and the engine facade. The context does
not implement dynamics by itself; it only stores state and offers small
accessors for the active star set.
"""

from __future__ import annotations

from typing import List, Optional

from .config import EngineConfig
from .star import Star, create_star
from ..domains.binary.roche import BinarySystem

PRIMARY = 0
SECONDARY = 1


class SimulationContext:
    """State storage for one stellar life simulation.

    Attributes:
        cfg: Engine configuration.
        stars: ``[primary, secondary]``; the secondary always exists but
            only evolves while binary mode is enabled.
        binary: Mass-transfer policy over the two stars.
        binary_enabled: Whether the secondary takes part in ``advance``.
        running: Driver play/pause flag.
        scrubbing: True while a timeline scrub is in progress.
        speed: Manual-mode speed multiplier.
        clock_mode: ``"auto"`` or ``"manual"``.
        step: Number of integration steps applied so far.
    """

    def __init__(self, config: Optional[EngineConfig] = None,
                 primary_mass: Optional[float] = None,
                 secondary_mass: Optional[float] = None):
        self.cfg = config or EngineConfig()
        m1 = self.cfg.default_primary_mass if primary_mass is None else primary_mass
        m2 = self.cfg.default_secondary_mass if secondary_mass is None else secondary_mass
        self.stars: List[Star] = [create_star(m1, self.cfg), create_star(m2, self.cfg)]
        self.binary = BinarySystem(
            self,
            separation_au=self.cfg.default_separation_au,
            transfer_rate_per_year=self.cfg.default_transfer_rate_per_year,
            indices=(PRIMARY, SECONDARY),
        )
        self.binary_enabled = False
        self.running = False
        self.scrubbing = False
        self.speed = self.cfg.default_speed
        self.clock_mode = "auto"
        self.step = 0

    @property
    def primary(self) -> Star:
        return self.stars[PRIMARY]

    @property
    def secondary(self) -> Star:
        return self.stars[SECONDARY]

    def active_indices(self) -> List[int]:
        """Indices of the stars that evolve during ``advance``."""
        if self.binary_enabled:
            return [PRIMARY, SECONDARY]
        return [PRIMARY]

    def replace_star(self, index: int, initial_mass: float) -> Star:
        """Supersede the star at ``index`` with a fresh one."""
        star = create_star(initial_mass, self.cfg)
        self.stars[index] = star
        return star
