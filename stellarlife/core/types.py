"""
Common types shared by the engine subsystems.

Stages and fates are tagged enums matched exhaustively by the life-cycle
logic; their human readable labels live on the enum values. Life-cycle
events are small dataclasses returned from ``TimeIntegrator.advance`` so
that consumers react to discrete transitions instead of polling flags.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


def clamp(v: float, lo: float, hi: float) -> float:
    """Clamp ``v`` into ``[lo, hi]``."""
    return max(lo, min(hi, v))


class Fate(enum.Enum):
    """Terminal compact object a star collapses into."""

    WHITE_DWARF = "White Dwarf"
    NEUTRON_STAR = "Neutron Star"
    BLACK_HOLE = "Black Hole"

    @property
    def label(self) -> str:
        return self.value


class Stage(enum.Enum):
    """Living phases of the life-cycle state machine."""

    PROTOSTAR = "Protostar"
    MAIN_SEQUENCE = "Main Sequence"
    GIANT = "Giant"
    SUPERGIANT = "Supergiant"

    @property
    def label(self) -> str:
        return self.value


class EventType(enum.Enum):
    END_OF_LIFE = "end_of_life"
    COLLAPSE_COMPLETE = "collapse_complete"
    MASS_TRANSFER = "mass_transfer"


@dataclass
class LifecycleEvent:
    """Discrete transition emitted by one integration step.

    Attributes:
        type: Kind of event.
        star_index: Index of the star in the simulation context (the donor
            for mass transfer events).
        step: Integration step counter at which the event occurred.
        age: Age of the star (years) when the event occurred.
        supernova: For END_OF_LIFE, whether this end starts a supernova.
        fate: For END_OF_LIFE, the frozen fate.
        amount: For MASS_TRANSFER, solar masses moved.
        other_index: For MASS_TRANSFER, index of the accretor.
    """
    type: EventType
    star_index: int
    step: int
    age: float
    supernova: bool = False
    fate: Optional[Fate] = None
    amount: float = 0.0
    other_index: Optional[int] = None
