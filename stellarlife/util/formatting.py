"""
Display formatting and presentation lookup tables.

Renderers format engine output through these helpers. Non-finite values
are rendered as a placeholder rather than propagated. Colour and label
mappings are plain lookup tables keyed by the stage and fate enums; the
engine core never consults them.
"""

from __future__ import annotations

import math
from typing import Dict, List, Tuple, Union

import numpy as np

from ..core.config import EngineConfig
from ..core.types import Fate, Stage, clamp

PLACEHOLDER = "—"

STAGE_COLORS: Dict[Union[Stage, Fate], str] = {
    Stage.PROTOSTAR: "#ffb703",
    Stage.MAIN_SEQUENCE: "#5b9dff",
    Stage.GIANT: "#ef476f",
    Stage.SUPERGIANT: "#ef476f",
    Fate.WHITE_DWARF: "#8bd3e6",
    Fate.NEUTRON_STAR: "#c77dff",
    Fate.BLACK_HOLE: "#ff8fa3",
}

# CSS class suffix used for each fate zone on the mass scale
FATE_ZONE_CLASSES: Dict[Fate, str] = {
    Fate.WHITE_DWARF: "wd",
    Fate.NEUTRON_STAR: "ns",
    Fate.BLACK_HOLE: "bh",
}


def fmt(value: float, digits: int = 2) -> str:
    """Format ``value`` with fixed ``digits``; non-finite values become a dash."""
    if value is None or not math.isfinite(value):
        return PLACEHOLDER
    return f"{value:.{digits}f}"


def pretty_years(years: float) -> str:
    """Render a duration in kyr, Myr or Gyr."""
    if years < 1e6:
        return f"{fmt(years / 1e3, 1)} kyr"
    if years < 1e9:
        return f"{fmt(years / 1e6, 1)} Myr"
    return f"{fmt(years / 1e9, 2)} Gyr"


def _round_half_up(value: float) -> int:
    # halves go up, never to even
    return int(math.floor(value + 0.5))


def color_for_temperature(temp_k: float) -> Tuple[int, int, int]:
    """Map an effective temperature onto an RGB triple, red-cool to blue-hot."""
    t = clamp((temp_k - 2500.0) / (40000.0 - 2500.0), 0.0, 1.0)
    r = _round_half_up(255 * (1 - t) + 100 * t)
    g = _round_half_up(160 * (1 - t) + 180 * t)
    b = _round_half_up(120 * (1 - t) + 255 * t)
    return r, g, b


def css_rgb(rgb: Tuple[int, int, int]) -> str:
    return "rgb({},{},{})".format(*rgb)


def mass_scale_position(mass: float, cfg: EngineConfig = None) -> float:
    """Return the percentage position of ``mass`` along the fate scale."""
    cfg = cfg or EngineConfig()
    span = cfg.mass_max - cfg.mass_min
    return clamp((mass - cfg.mass_min) / span * 100.0, 0.0, 100.0)


def fate_zones(cfg: EngineConfig = None) -> List[Tuple[str, float, float]]:
    """Return ``(zone_class, left_pct, width_pct)`` for each fate zone."""
    cfg = cfg or EngineConfig()
    edges = np.array([cfg.mass_min, cfg.wd_max, cfg.ns_max, cfg.mass_max])
    pct = (edges - cfg.mass_min) / (cfg.mass_max - cfg.mass_min) * 100.0
    widths = np.diff(pct)
    fates = (Fate.WHITE_DWARF, Fate.NEUTRON_STAR, Fate.BLACK_HOLE)
    return [
        (FATE_ZONE_CLASSES[f], float(left), float(width))
        for f, left, width in zip(fates, pct[:-1], widths)
    ]
