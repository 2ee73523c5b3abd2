"""
Physical relations for the stellar life model.

This module collects the closed-form power laws that map a star's mass to
its life-cycle durations, luminosity, radius, effective temperature and
terminal fate. The relations are deliberately simple: they trade physical
fidelity for monotonic, always-defined behaviour suitable for a continuous
animated display. Every function is total over its domain; extreme values
are clamped to keep derived quantities finite and visually bounded across
the 0.1 to 50 solar mass range.

The numeric relations accept either Python floats or numpy arrays so that
whole evolutionary grids (for example a fate scale or a mass sweep) can be
evaluated in one call. Scalar inputs always produce Python floats.
"""

from __future__ import annotations

from typing import Optional, Tuple, Union

import numpy as np

from ...core.config import EngineConfig
from ...core.types import Fate

ArrayLike = Union[float, np.ndarray]

_DEFAULT_CFG = EngineConfig()


def _cfg(cfg: Optional[EngineConfig]) -> EngineConfig:
    return cfg if cfg is not None else _DEFAULT_CFG


def _as_output(x) -> ArrayLike:
    # scalars back to plain floats, arrays untouched
    if np.ndim(x) == 0:
        return float(x)
    return x


def main_sequence_lifetime(mass: ArrayLike, cfg: Optional[EngineConfig] = None) -> ArrayLike:
    """Return the main-sequence lifetime in years, ``t_MS = 10 Gyr * M^-2.5``."""
    c = _cfg(cfg)
    return _as_output(c.ms_lifetime_norm * np.power(np.asarray(mass, dtype=np.float64), c.ms_lifetime_exp))


def phase_durations(mass: float, cfg: Optional[EngineConfig] = None) -> Tuple[float, float, float, float]:
    """Return ``(t_protostar, t_ms, t_giant, t_total)`` in years for ``mass``.

    The protostellar and post-main-sequence phases are fixed fractions of
    the main-sequence lifetime; the total is their exact sum.
    """
    c = _cfg(cfg)
    t_ms = float(main_sequence_lifetime(mass, c))
    t_protostar = t_ms * c.protostar_fraction
    t_giant = t_ms * c.giant_fraction
    t_total = t_protostar + t_ms + t_giant
    return t_protostar, t_ms, t_giant, t_total


def luminosity(mass: ArrayLike, cfg: Optional[EngineConfig] = None) -> ArrayLike:
    """Return luminosity in solar units, ``L = M^3.5`` clamped to [1e-3, 1e6]."""
    lo, hi = _cfg(cfg).luminosity_bounds
    return _as_output(np.clip(np.power(np.asarray(mass, dtype=np.float64), 3.5), lo, hi))


def radius(mass: ArrayLike, cfg: Optional[EngineConfig] = None) -> ArrayLike:
    """Return radius in solar units, ``R = M^0.8`` clamped to [0.05, 2000]."""
    lo, hi = _cfg(cfg).radius_bounds
    return _as_output(np.clip(np.power(np.asarray(mass, dtype=np.float64), 0.8), lo, hi))


def temperature(lum: ArrayLike, rad: ArrayLike, cfg: Optional[EngineConfig] = None) -> ArrayLike:
    """Return effective temperature in kelvin.

    Uses ``T / T_sun = (L / R^2)^(1/4)`` with ``T_sun = 5772 K`` and clamps
    the result to [2000, 60000] K.
    """
    c = _cfg(cfg)
    lo, hi = c.temperature_bounds
    lum = np.asarray(lum, dtype=np.float64)
    rad = np.asarray(rad, dtype=np.float64)
    ratio = np.power(lum / np.power(rad, 2), 0.25)
    return _as_output(np.clip(c.t_sun * ratio, lo, hi))


def fate_for_mass(mass: float, cfg: Optional[EngineConfig] = None) -> Fate:
    """Return the terminal fate for a star of the given current mass."""
    c = _cfg(cfg)
    if mass < c.wd_max:
        return Fate.WHITE_DWARF
    if mass < c.ns_max:
        return Fate.NEUTRON_STAR
    return Fate.BLACK_HOLE


def schwarzschild_radius(mass: float, cfg: Optional[EngineConfig] = None) -> float:
    """Return the Schwarzschild radius in solar radii (2.95 km per solar mass)."""
    c = _cfg(cfg)
    return max(c.bh_km_per_msun * mass / c.km_per_rsun, c.bh_radius_floor)


def final_compact_radius(star, cfg: Optional[EngineConfig] = None) -> float:
    """Return the radius (solar radii) of the compact object ``star`` leaves."""
    c = _cfg(cfg)
    if star.fate is Fate.WHITE_DWARF:
        return c.wd_radius
    if star.fate is Fate.NEUTRON_STAR:
        return c.ns_radius
    return schwarzschild_radius(star.mass_current, c)


def stellar_radius_au(radius_rsun: ArrayLike, cfg: Optional[EngineConfig] = None) -> ArrayLike:
    """Convert a radius from solar radii to astronomical units (1 AU ~ 215 R_sun)."""
    return _as_output(np.asarray(radius_rsun, dtype=np.float64) / _cfg(cfg).rsun_per_au)
