"""Command scaffold configuration.

Typed configuration for a scaffold run. All settings use Pydantic v2 models
so they can be validated at construction time and serialised to/from JSON or
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator


DEFAULT_TEMPLATE_ROOT = Path(__file__).parent / "scaffolder" / "templates"


class CollisionPolicy(str, Enum):
    """What to do when a destination file already exists."""

    FAIL = "fail"
    OVERWRITE = "overwrite"
    SKIP = "skip"


class TemplateSyntax(BaseModel):
    """Jinja2 delimiters used to recognise placeholders.

    Defaults to EJS-style markers (``<%= name %>``) so that the Liquid tags
    in generated files (``{{ }}`` and ``{% %}``) pass through untouched.
    """

    variable_start: str = Field(default="<%=")
    variable_end: str = Field(default="%>")
    block_start: str = Field(default="<%")
    block_end: str = Field(default="%>")
    comment_start: str = Field(default="<%#")
    comment_end: str = Field(default="%>")

    @model_validator(mode="after")
    def _non_empty(self) -> "TemplateSyntax":
        for name, value in self:
            if not value:
                raise ValueError(f"Delimiter {name!r} must not be empty")
        return self

    def environment_options(self) -> dict[str, str]:
        """Return keyword arguments for ``jinja2.Environment``."""
        return {
            "variable_start_string": self.variable_start,
            "variable_end_string": self.variable_end,
            "block_start_string": self.block_start,
            "block_end_string": self.block_end,
            "comment_start_string": self.comment_start,
            "comment_end_string": self.comment_end,
        }


class Config(BaseModel):
    """Global scaffold configuration.

    Instances are typically created once by the CLI entry point and then
    passed to the template source and the generator.
    """

    project_root: Path = Field(default=Path("."))
    template_root: Path = Field(default=DEFAULT_TEMPLATE_ROOT)
    commands_dir: str = Field(
        default="app/lib/commands",
        description="Destination directory relative to the project root",
    )
    file_template: str = Field(
        default="lib/commands/create.liquid",
        description="Single-file template, relative to the template root",
    )
    directory_template: str = Field(
        default="lib/commands/create",
        description="Template directory, relative to the template root",
    )
    on_existing: CollisionPolicy = Field(default=CollisionPolicy.FAIL)
    syntax: TemplateSyntax = Field(default_factory=TemplateSyntax)

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def destination_base(self, destination: str | None = None) -> Path:
        """Directory where commands are generated.

        *destination* is relative to the project root and defaults to
        ``commands_dir``.
        """
        return self.project_root / (destination or self.commands_dir)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            CMDSCAFFOLD_PROJECT_ROOT, CMDSCAFFOLD_TEMPLATE_ROOT,
            CMDSCAFFOLD_COMMANDS_DIR, CMDSCAFFOLD_ON_EXISTING.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CMDSCAFFOLD_PROJECT_ROOT"):
            kwargs["project_root"] = Path(os.environ["CMDSCAFFOLD_PROJECT_ROOT"])
        if os.environ.get("CMDSCAFFOLD_TEMPLATE_ROOT"):
            kwargs["template_root"] = Path(os.environ["CMDSCAFFOLD_TEMPLATE_ROOT"])
        if os.environ.get("CMDSCAFFOLD_COMMANDS_DIR"):
            kwargs["commands_dir"] = os.environ["CMDSCAFFOLD_COMMANDS_DIR"]
        if os.environ.get("CMDSCAFFOLD_ON_EXISTING"):
            kwargs["on_existing"] = os.environ["CMDSCAFFOLD_ON_EXISTING"].strip().lower()
        return cls(**kwargs)
