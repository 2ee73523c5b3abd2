"""
Simulation configuration definitions.

This module defines the configuration dataclass used to parameterise the
stellar life engine. All fields carry explicit defaults matching the
educational model (power-law relations, fate thresholds, clock scaling)
so that an engine can be created without supplying any value. See
``EngineConfig`` for the single configuration object consumed by the
engine and its subsystems.
"""

from __future__ import annotations

from dataclasses import dataclass

#: Years in one million years; transfer rates are entered per Myr.
MYR = 1e6


@dataclass
class EngineConfig:
    """Top level configuration for stellar life engine runs.

    Fields group into the physical relations, the life-cycle state
    machine, the binary mass-transfer policy and the simulation clock.
    The defaults reproduce the behaviour of the interactive model; tests
    override individual fields where they need a faster collapse or a
    shorter event history.
    """

    # Mass domain (solar masses)
    mass_min: float = 0.1
    mass_max: float = 50.0

    # Fate thresholds: below wd_max a white dwarf, below ns_max a neutron star
    wd_max: float = 8.0
    ns_max: float = 20.0
    # Initial mass at or above which the post-MS phase is a supergiant
    supergiant_min: float = 8.0

    # Main-sequence lifetime t_MS = ms_lifetime_norm * M ** ms_lifetime_exp
    ms_lifetime_norm: float = 10e9
    ms_lifetime_exp: float = -2.5
    protostar_fraction: float = 0.01
    giant_fraction: float = 0.10

    # Clamp bounds for derived display quantities
    luminosity_bounds: tuple = (1e-3, 1e6)
    radius_bounds: tuple = (0.05, 2000.0)
    temperature_bounds: tuple = (2000.0, 60000.0)
    t_sun: float = 5772.0

    # Compact remnants (solar radii)
    wd_radius: float = 0.012
    ns_radius: float = 1.5e-5
    bh_km_per_msun: float = 2.95
    km_per_rsun: float = 696000.0
    bh_radius_floor: float = 5e-6

    # Binary geometry and transfer
    rsun_per_au: float = 215.0
    separation_bounds: tuple = (0.01, 10.0)
    mass_ratio_bounds: tuple = (1e-3, 1e3)
    transfer_rate_max_per_myr: float = 0.2
    donor_mass_floor: float = 0.1

    # Simulation clock
    auto_scale_seconds: float = 60.0
    manual_years_per_second: float = 1e7
    default_speed: float = 10.0

    # Collapse animation runs over wall-clock time, not simulated years
    collapse_duration_ms: float = 1500.0

    # Bounded life-cycle event history kept by the ledger
    event_history_max: int = 512

    # Session defaults
    default_primary_mass: float = 1.0
    default_secondary_mass: float = 0.8
    default_separation_au: float = 0.5
    default_transfer_rate_per_myr: float = 0.01

    @property
    def transfer_rate_max_per_year(self) -> float:
        return self.transfer_rate_max_per_myr / MYR

    @property
    def default_transfer_rate_per_year(self) -> float:
        return self.default_transfer_rate_per_myr / MYR

    def to_dict(self) -> dict:
        """Return a dict representation of the configuration.

        Useful for serialisation or interfacing with dynamic
        configuration loaders.
        """
        return self.__dict__.copy()
