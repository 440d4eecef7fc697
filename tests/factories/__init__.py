"""
Test factories for generating realistic test data.

Uses factory_boy for declarative test data generation.
"""

from .equipment import EquipmentFactory, WindowEquipmentFactory
from .intervention import (
    InterventionFactory,
    ComplaintFactory,
    ReservationFactory,
    RelocationFactory,
    UninstallFactory,
)

__all__ = [
    "EquipmentFactory",
    "WindowEquipmentFactory",
    # Interventions
    "InterventionFactory",
    "ComplaintFactory",
    "ReservationFactory",
    "RelocationFactory",
    "UninstallFactory",
]
