"""
Specimen generation for autospecimen.

This module contains the default specimen builder and ready-made
customizations for it.
"""

from .customizations import (
    CompositeCustomization,
    InjectCustomization,
    RegisterCustomization,
)
from .fixture import Fixture

__all__ = [
    "Fixture",
    "InjectCustomization",
    "RegisterCustomization",
    "CompositeCustomization",
]
