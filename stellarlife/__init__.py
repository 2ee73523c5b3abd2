"""
Stellar life simulation engine package.

This package models single- and binary-star evolution with closed-form
power laws: given one or two initial masses it produces time-varying
stage, luminosity, radius, temperature and fate, and for binaries it
moves mass between the stars through Roche-lobe overflow.

The major subpackages are:

``stellarlife.core``       Core engine components such as configuration,
                           common types, the star record, the simulation
                           context, the ledger, the time integrator, the
                           simulation clock and the engine facade.
``stellarlife.domains``    Domain rules: stellar physical relations and
                           life-cycle stages, binary Roche-lobe geometry
                           and mass transfer.
``stellarlife.util``       Display formatting and logging helpers.
``stellarlife.scenarios``  Preset scenarios (red dwarf, Sun, massive star,
                           interacting binary).

Please see the individual modules for further documentation.
"""

__all__ = [
    "core",
    "domains",
    "util",
    "scenarios",
]
