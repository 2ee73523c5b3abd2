"""
Preset scenarios.

Each preset fixes the stellar masses and, for the binary preset, the
separation and transfer rate. Applying a preset rebuilds the primary (and,
for the binary preset, the secondary) at age zero, clears the event
ledger and pauses the engine, exactly as choosing a preset in the
interactive model does.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from ..core.config import MYR
from ..core.context import PRIMARY
from ..core.engine import StellarEngine


@dataclass(frozen=True)
class Preset:
    name: str
    primary_mass: float
    binary: bool = False
    secondary_mass: Optional[float] = None
    separation_au: Optional[float] = None
    transfer_rate_per_myr: Optional[float] = None


PRESETS: Dict[str, Preset] = {
    "red-dwarf": Preset("red-dwarf", 0.2),
    "sun": Preset("sun", 1.0),
    "massive": Preset("massive", 20.0),
    "binary-rlof": Preset(
        "binary-rlof", 1.2, binary=True, secondary_mass=0.8,
        separation_au=0.2, transfer_rate_per_myr=0.02,
    ),
}


def apply_preset(engine: StellarEngine, name: str) -> Preset:
    """Load preset ``name`` into ``engine``.

    Raises:
        KeyError: if ``name`` is not a known preset.
    """
    preset = PRESETS[name]
    ctx = engine.context
    # single-star presets leave the secondary as it is
    ctx.replace_star(PRIMARY, preset.primary_mass)
    if preset.binary:
        engine.set_secondary_mass(preset.secondary_mass)
        engine.configure_binary(
            True,
            separation_au=preset.separation_au,
            transfer_rate_per_year=preset.transfer_rate_per_myr / MYR,
        )
    else:
        engine.configure_binary(False)
    engine.ledger.clear()
    ctx.step = 0
    engine.pause()
    return preset
