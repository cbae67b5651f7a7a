"""Pydantic v2 models shared by every stage of a scaffold run.

Requests and template units are frozen: a run never mutates its inputs.
Outcomes are built up by the generator and returned to the caller, which
decides how to report them.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from .errors import InvalidCommandNameError


# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------


class ScaffoldRequest(BaseModel):
    """One invocation of the generator for a single command name."""

    model_config = ConfigDict(frozen=True)

    command_name: str = Field(..., description="Name of the command, used verbatim")

    @field_validator("command_name", mode="before")
    @classmethod
    def _require_name(cls, value: object) -> object:
        # Raised directly (not as a ValidationError) so callers can catch it
        # by its domain type.
        if value is None or (isinstance(value, str) and not value.strip()):
            raise InvalidCommandNameError("Command name must be a non-empty string")
        return value


class UnitKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


class TemplateUnit(BaseModel):
    """A single template file or a whole template directory."""

    model_config = ConfigDict(frozen=True)

    kind: UnitKind
    source: str = Field(..., description="Path relative to the template root")
    destination: str = Field(
        default="app/lib/commands",
        description="Base directory relative to the project root",
    )

    @property
    def is_directory(self) -> bool:
        return self.kind is UnitKind.DIRECTORY

    @property
    def label(self) -> str:
        """Short human-readable name, e.g. ``file:lib/commands/create.liquid``."""
        return f"{self.kind.value}:{self.source}"


class RenderResult(BaseModel):
    """A rendered artifact, relative to its unit's destination."""

    relative_path: str = Field(..., description="Rendered path ('' for a file unit)")
    content: str


# ---------------------------------------------------------------------------
# Outcomes
# ---------------------------------------------------------------------------


class UnitStatus(str, Enum):
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


class UnitOutcome(BaseModel):
    """What happened to one template unit during a run."""

    unit: TemplateUnit
    status: UnitStatus
    written: list[Path] = Field(default_factory=list)
    skipped: list[Path] = Field(default_factory=list)
    unchanged: list[Path] = Field(
        default_factory=list,
        description="Existing files whose content already matched the rendered output",
    )
    error_kind: Optional[str] = Field(default=None, description="ScaffoldError.kind of the failure")
    error: str = Field(default="", description="Error message, empty on success")


class RunOutcome(BaseModel):
    """Aggregated result of a scaffold run.

    A run always reaches this state; per-unit failures are recorded here
    instead of being raised.
    """

    command_name: str
    units: list[UnitOutcome] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def success(self) -> bool:
        """True when no unit failed."""
        return all(u.status is not UnitStatus.FAILED for u in self.units)

    @property
    def failed_units(self) -> list[UnitOutcome]:
        return [u for u in self.units if u.status is UnitStatus.FAILED]

    @property
    def written_files(self) -> list[Path]:
        return [path for u in self.units for path in u.written]
