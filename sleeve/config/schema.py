# Sleeve Configuration Schema
# Pydantic models for YAML configuration validation

import codecs
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class RunnerConfig(BaseModel):
    """Settings for running the Python interpreter."""

    interpreter: str | None = Field(default=None, description="Interpreter path. None = running interpreter")
    sudo: bool = Field(default=False, description="Run as the interpreter's owner when needed")
    verbose: bool = Field(default=False, description="Echo commands before running them")

    @field_validator("interpreter")
    @classmethod
    def expand_interpreter(cls, v: str | None) -> str | None:
        """Expand ~ in interpreter path."""
        if v is None:
            return None
        return str(Path(v).expanduser())


class PropertiesConfig(BaseModel):
    """Settings for reading and writing properties files."""

    encoding: str = Field(default="utf-8", description="File encoding for properties files")

    @field_validator("encoding")
    @classmethod
    def known_encoding(cls, v: str) -> str:
        """Reject encodings Python has no codec for."""
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown encoding: {v}") from None
        return v


class OutputConfig(BaseModel):
    """Output configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")


class SleeveConfig(BaseModel):
    """Root configuration model for sleeve."""

    runner: RunnerConfig = Field(default_factory=RunnerConfig, description="Runner settings")
    properties: PropertiesConfig = Field(default_factory=PropertiesConfig, description="Properties file settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")
