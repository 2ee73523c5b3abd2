"""
Life-cycle state machine and display projection for a single star.

The stage of a star is a pure function of its age measured against the
phase boundaries derived from its current mass:

    Protostar -> Main Sequence -> Giant | Supergiant -> ended (fate)

The post-main-sequence branch is chosen from the *initial* mass and does
not change if mass transfer later moves the current mass across the
threshold. Once a star has ended the stage becomes its frozen fate.

Everything here is read-only with respect to the star; the transitions
themselves are applied by the time integrator and the ledger.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ...core.config import EngineConfig
from ...core.types import Fate, Stage, clamp
from . import relations

_DEFAULT_CFG = EngineConfig()


@dataclass(frozen=True)
class DisplayState:
    """Derived quantities the renderer shows for a star."""
    luminosity: float
    radius: float
    temperature_k: float
    stage_label: str


def stage_for_star(star, cfg: Optional[EngineConfig] = None) -> Union[Stage, Fate]:
    """Return the current life-cycle stage, or the fate once the star ended."""
    cfg = cfg or _DEFAULT_CFG
    if star.ended:
        return star.fate
    if star.age < star.t_protostar:
        return Stage.PROTOSTAR
    if star.age < star.t_protostar + star.t_ms:
        return Stage.MAIN_SEQUENCE
    if star.age < star.t_total:
        return Stage.SUPERGIANT if star.mass_initial >= cfg.supergiant_min else Stage.GIANT
    # age reached t_total but the end transition has not been applied yet
    return star.fate


def derive_display(star, cfg: Optional[EngineConfig] = None) -> DisplayState:
    """Project a star onto luminosity, radius, temperature and stage label.

    Pure: calling it any number of times without an intervening step
    yields identical output.
    """
    lum = relations.luminosity(star.mass_current, cfg)
    rad = relations.radius(star.mass_current, cfg)
    temp = relations.temperature(lum, rad, cfg)
    return DisplayState(
        luminosity=lum,
        radius=rad,
        temperature_k=temp,
        stage_label=stage_for_star(star, cfg).label,
    )


def visual_radius(star, cfg: Optional[EngineConfig] = None) -> float:
    """Return the radius (solar radii) a renderer should draw.

    Living stars use the mass-radius relation. During the collapse
    transition the radius shrinks geometrically towards the compact
    object radius; once the collapse completes only the compact radius
    is reported.
    """
    stellar = relations.radius(star.mass_current, cfg)
    if not star.ended:
        return stellar
    compact = relations.final_compact_radius(star, cfg)
    if not star.collapse_animating:
        return compact if star.collapse_progress >= 1.0 else stellar
    p = clamp(star.collapse_progress, 0.0, 1.0)
    return math.exp((1.0 - p) * math.log(stellar) + p * math.log(compact))


def phase_boundaries(star) -> Tuple[float, float, float]:
    """Return the ages (years) at which the star leaves each living phase."""
    return star.t_protostar, star.t_protostar + star.t_ms, star.t_total


def timeline_segments(star) -> Tuple[float, float, float]:
    """Return protostar, main-sequence and giant shares of ``t_total``."""
    total = star.t_total
    return star.t_protostar / total, star.t_ms / total, star.t_giant / total


def progress(star) -> float:
    """Fraction of the total lifetime elapsed, clamped to [0, 1]."""
    return clamp(star.age / star.t_total, 0.0, 1.0)
