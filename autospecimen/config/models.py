"""Pydantic models for autospecimen configuration."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FixtureConfig(BaseModel):
    """Configuration for the default specimen builder."""

    repeat_count: int = Field(
        default=3,
        ge=1,
        le=100,
        description="Number of items generated for collection types",
    )

    number_start: int = Field(
        default=1,
        ge=0,
        description="First value of the shared number sequence",
    )

    recursion_behavior: Literal["throw", "omit"] = Field(
        default="throw",
        description=(
            "What to do when a type is requested while it is already being built: "
            "'throw' raises RecursionDetectedError, 'omit' supplies None"
        ),
    )

    string_separator: str = Field(
        default="",
        description="Text placed between the name prefix and the unique part of strings",
    )

    model_config = ConfigDict(extra="forbid")


class AutoSpecimenConfig(BaseModel):
    """Main configuration model for autospecimen."""

    fixture: FixtureConfig = Field(
        default_factory=FixtureConfig,
        description="Default specimen builder configuration",
    )

    log_level: str = Field(
        default="WARNING",
        description="Level applied to the autospecimen logger",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: Any) -> Any:
        """Ensure the log level is one the logging module knows."""
        normalized = str(v).upper()
        if normalized not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"Unknown log level: {v}")
        return normalized

    model_config = ConfigDict(validate_assignment=True, extra="forbid")
