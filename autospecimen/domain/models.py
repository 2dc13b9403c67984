"""
Domain models for the autospecimen system.

This module contains the exception hierarchy and the Pydantic value models
exchanged between data providers, the specimen builder and the test host.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AutoSpecimenError(Exception):
    """Base exception for autospecimen domain errors."""

    pass


class DataConfigurationError(AutoSpecimenError):
    """Raised when declared data cannot be mapped onto a test signature."""

    pass


class SpecimenCreationError(AutoSpecimenError):
    """Raised when no specimen can be created for a requested type."""

    def __init__(self, message: str, path: tuple[str, ...] = ()):
        self.path = path
        if path:
            message = f"{message} (request path: {' -> '.join(path)})"
        super().__init__(message)


class RecursionDetectedError(SpecimenCreationError):
    """Raised when a type is requested again while it is still being built."""

    pass


class ParameterRequest(BaseModel):
    """
    A single parameter of a test function that needs a value.

    The annotation is the resolved type hint; ``Any`` stands in for
    unannotated parameters.
    """

    name: str = Field(..., description="Parameter name")
    annotation: Any = Field(Any, description="Resolved type hint")
    position: int = Field(..., ge=0, description="Zero-based position")
    keyword_only: bool = Field(False, description="Must be passed by name")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class DataRow(BaseModel):
    """One row of argument values for a single test invocation."""

    values: tuple[Any, ...] = Field(
        default_factory=tuple, description="Positional argument values"
    )
    id: str = Field("", description="Stable label for the test case")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __len__(self) -> int:
        return len(self.values)

    def extend(self, other: "DataRow") -> "DataRow":
        """Return a new row with ``other``'s values appended."""
        ids = [part for part in (self.id, other.id) if part]
        return DataRow(values=self.values + other.values, id="-".join(ids))


class TheoryCaseResult(BaseModel):
    """Outcome of invoking a theory once with one data row."""

    index: int = Field(..., ge=0, description="Row index within the theory")
    case_id: str = Field("", description="Row label")
    arguments: tuple[Any, ...] = Field(
        default_factory=tuple, description="Arguments the test received"
    )
    passed: bool = Field(..., description="Whether the invocation succeeded")
    error_message: str | None = Field(
        None,
        description="Error description when the invocation failed",
        validate_default=True,
    )

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @field_validator("error_message")
    @classmethod
    def validate_error_message(cls, v: Any, info: Any) -> Any:
        """Failed cases must say why they failed."""
        if info.data.get("passed") is False and not v:
            raise ValueError("Error message must be provided when passed is False")
        return v
