"""
Port interfaces for the autospecimen system.

This module contains the interface definitions using Python Protocols
to define contracts between data providers, specimen builders and the host.
"""

from .data_source_port import DataSourcePort
from .specimen_port import CustomizationPort, SpecimenBuilderPort

__all__ = [
    "DataSourcePort",
    "SpecimenBuilderPort",
    "CustomizationPort",
]
