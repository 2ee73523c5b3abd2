"""
Roche-lobe overflow and conservative mass transfer for a binary pair.

The Roche-lobe radius follows the Eggleton (1983) fit

    RL / a = 0.49 q^(2/3) / (0.6 q^(2/3) + ln(1 + q^(1/3))),   q = M_d / M_a

with the mass ratio clamped to [1e-3, 1e3] so that the logarithm and cube
root terms always receive in-domain arguments. Stellar radii are
converted from solar radii to astronomical units before comparing them
with the lobe.

``BinarySystem`` is a policy object: it owns no stars. It refers to the
donor and accretor candidates by index into the simulation context and is
re-evaluated on every integration step. Transfer only happens while
neither star has ended; when exactly one star overfills its lobe it
donates ``rate * dt`` solar masses to its companion, never dropping below
the donor mass floor. Symmetric overflow (both stars overfilling) is not
resolved into a net flow.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from ...core.config import EngineConfig
from ...core.types import EventType, LifecycleEvent, clamp
from ..stellar import relations

logger = logging.getLogger(__name__)

_DEFAULT_CFG = EngineConfig()


def roche_lobe_fraction(m_donor: float, m_accretor: float, cfg: Optional[EngineConfig] = None) -> float:
    """Return ``RL / a`` for the donor of a pair (Eggleton approximation)."""
    lo, hi = (cfg or _DEFAULT_CFG).mass_ratio_bounds
    q = clamp(m_donor / m_accretor, lo, hi)
    q13 = q ** (1.0 / 3.0)
    q23 = q13 * q13
    return 0.49 * q23 / (0.6 * q23 + math.log(1.0 + q13))


def roche_lobe_radius(m_donor: float, m_accretor: float, separation_au: float,
                      cfg: Optional[EngineConfig] = None) -> float:
    """Return the donor's Roche-lobe radius in AU."""
    return roche_lobe_fraction(m_donor, m_accretor, cfg) * separation_au


@dataclass(frozen=True)
class LobeState:
    """Overflow geometry of one star, for rendering lobe outlines."""
    star_index: int
    radius_au: float
    roche_lobe_au: float
    overfills: bool


class BinarySystem:
    """Mass-transfer policy over two stars held by a simulation context.

    Attributes:
        context: Owning simulation context (provides ``stars`` and ``cfg``).
        indices: ``(i, j)`` indices of the pair inside ``context.stars``.
        separation_au: Fixed orbital separation.
        transfer_rate_per_year: Solar masses moved per simulated year while
            a single star overfills.
    """

    def __init__(self, context, separation_au: float, transfer_rate_per_year: float,
                 indices: tuple = (0, 1)):
        self.context = context
        self.indices = indices
        self.separation_au = 0.0
        self.transfer_rate_per_year = 0.0
        self.set_separation(separation_au)
        self.set_transfer_rate(transfer_rate_per_year)

    @property
    def cfg(self) -> EngineConfig:
        return self.context.cfg

    def set_separation(self, separation_au: float) -> None:
        lo, hi = self.cfg.separation_bounds
        self.separation_au = clamp(float(separation_au), lo, hi)

    def set_transfer_rate(self, rate_per_year: float) -> None:
        self.transfer_rate_per_year = clamp(float(rate_per_year), 0.0, self.cfg.transfer_rate_max_per_year)

    def lobe_states(self) -> List[LobeState]:
        """Return the overflow geometry of both stars."""
        i, j = self.indices
        stars = self.context.stars
        states = []
        for own, other in ((i, j), (j, i)):
            star, companion = stars[own], stars[other]
            r_au = relations.stellar_radius_au(relations.radius(star.mass_current, self.cfg), self.cfg)
            rl_au = roche_lobe_radius(star.mass_current, companion.mass_current, self.separation_au, self.cfg)
            states.append(LobeState(own, r_au, rl_au, r_au > rl_au))
        return states

    def donor(self) -> Optional[int]:
        """Return the index of the single overfilling star, else ``None``."""
        first, second = self.lobe_states()
        if first.overfills and not second.overfills:
            return first.star_index
        if second.overfills and not first.overfills:
            return second.star_index
        return None

    def transfer(self, dt_years: float, step: int = 0) -> Optional[LifecycleEvent]:
        """Apply one step of Roche-lobe overflow.

        Returns a MASS_TRANSFER event when mass moved, ``None`` otherwise.
        """
        i, j = self.indices
        stars = self.context.stars
        if stars[i].ended or stars[j].ended:
            return None
        donor_index = self.donor()
        if donor_index is None:
            return None
        accretor_index = j if donor_index == i else i
        donor, accretor = stars[donor_index], stars[accretor_index]
        available = donor.mass_current - self.cfg.donor_mass_floor
        dm = min(self.transfer_rate_per_year * dt_years, available)
        if dm <= 0:
            return None
        if dm >= available:
            donor.mass_current = self.cfg.donor_mass_floor
        else:
            donor.mass_current -= dm
        accretor.mass_current += dm
        donor.recompute(self.cfg)
        accretor.recompute(self.cfg)
        logger.debug(
            "RLOF star %d -> star %d: dm=%.3e Msun (donor %.4f, accretor %.4f)",
            donor_index, accretor_index, dm, donor.mass_current, accretor.mass_current,
        )
        return LifecycleEvent(
            type=EventType.MASS_TRANSFER,
            star_index=donor_index,
            step=step,
            age=donor.age,
            amount=dm,
            other_index=accretor_index,
        )
