"""
Data providers for parameterized tests.

This module contains the literal, generated and composed providers, and the
signature inspection that tells them which parameters to fill.
"""

from .parameters import parameters_of
from .sources import (
    AutoData,
    CompositeData,
    InlineAutoData,
    InlineData,
    format_row_id,
)

__all__ = [
    "InlineData",
    "AutoData",
    "CompositeData",
    "InlineAutoData",
    "format_row_id",
    "parameters_of",
]
