"""Sub-system calculators, one strategy per optional building sub-system."""

from __future__ import annotations

from typing import TYPE_CHECKING

from quickest.subsystems.accessory import AccessoryCalculator
from quickest.subsystems.base import SubsystemCalculator
from quickest.subsystems.canopy import CanopyCalculator
from quickest.subsystems.crane import CraneCalculator
from quickest.subsystems.liner import LinerCalculator
from quickest.subsystems.mezzanine import MezzanineCalculator
from quickest.subsystems.monitor import MonitorCalculator
from quickest.subsystems.partition import PartitionCalculator

if TYPE_CHECKING:
    from quickest.data.store import ReferenceStore
    from quickest.models.enums import SubsystemKind

CALCULATOR_TYPES: tuple[type[SubsystemCalculator], ...] = (
    MezzanineCalculator,
    CraneCalculator,
    AccessoryCalculator,
    PartitionCalculator,
    CanopyCalculator,
    MonitorCalculator,
    LinerCalculator,
)


def default_calculators(store: ReferenceStore) -> dict[SubsystemKind, SubsystemCalculator]:
    """One calculator per sub-system kind, all sharing ``store``."""
    return {calculator.kind: calculator(store) for calculator in CALCULATOR_TYPES}


__all__ = [
    "CALCULATOR_TYPES",
    "AccessoryCalculator",
    "CanopyCalculator",
    "CraneCalculator",
    "LinerCalculator",
    "MezzanineCalculator",
    "MonitorCalculator",
    "PartitionCalculator",
    "SubsystemCalculator",
    "default_calculators",
]
