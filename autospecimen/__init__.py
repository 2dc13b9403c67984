"""
autospecimen - literal and auto-generated data for parameterized tests.

Combine hard-coded values for a test's leading parameters with anonymous
specimens for the rest:

    from autospecimen import inline_auto_data

    @inline_auto_data(1337, 7)
    def test_values(x: int, y: int, z: int):
        assert x == 1337
"""

__version__ = "0.1.0"

from .config import AutoSpecimenConfig, ConfigLoader, FixtureConfig, load_config
from .data import AutoData, CompositeData, InlineAutoData, InlineData
from .domain.models import (
    AutoSpecimenError,
    DataConfigurationError,
    DataRow,
    ParameterRequest,
    RecursionDetectedError,
    SpecimenCreationError,
    TheoryCaseResult,
)
from .fixture import (
    CompositeCustomization,
    Fixture,
    InjectCustomization,
    RegisterCustomization,
)
from .theory import Theory, auto_data, data_source, inline_auto_data, inline_data

__all__ = [
    "InlineAutoData",
    "InlineData",
    "AutoData",
    "CompositeData",
    "Fixture",
    "InjectCustomization",
    "RegisterCustomization",
    "CompositeCustomization",
    "Theory",
    "inline_auto_data",
    "auto_data",
    "inline_data",
    "data_source",
    "AutoSpecimenConfig",
    "FixtureConfig",
    "ConfigLoader",
    "load_config",
    "AutoSpecimenError",
    "DataConfigurationError",
    "SpecimenCreationError",
    "RecursionDetectedError",
    "ParameterRequest",
    "DataRow",
    "TheoryCaseResult",
]
