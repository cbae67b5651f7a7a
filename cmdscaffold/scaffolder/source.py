"""Template sources.

The generator does not know where templates live; it asks a
``TemplateSource`` for the units to render and for their raw text.
``FileSystemTemplateSource`` is the default implementation, reading from a
template root on disk (the packaged templates unless configured otherwise).
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from cmdscaffold.config import Config

from .errors import TemplateNotFoundError, TemplateSyntaxFailure
from .models import TemplateUnit, UnitKind


@runtime_checkable
class TemplateSource(Protocol):
    """Capability the generator depends on to discover and read templates."""

    def list_units(self) -> list[TemplateUnit]:
        """Return the units to render, in the order they are written."""
        ...

    def list_files(self, unit: TemplateUnit) -> list[str]:
        """Return file paths of *unit*, relative to the unit's source.

        A file unit yields a single empty string.
        """
        ...

    def read_raw(self, unit: TemplateUnit, relative_path: str = "") -> str:
        """Return the raw template text of one file of *unit*."""
        ...


class FileSystemTemplateSource:
    """Reads templates from a directory on disk.

    By default it exposes exactly two units: the single-file template and
    the template directory named in the config, both written below the
    config's ``commands_dir``.
    """

    def __init__(
        self,
        template_root: str | Path,
        units: list[TemplateUnit] | None = None,
    ) -> None:
        self.template_root = Path(template_root)
        self._units = list(units) if units is not None else []

    @classmethod
    def from_config(cls, config: Config) -> "FileSystemTemplateSource":
        units = [
            TemplateUnit(
                kind=UnitKind.FILE,
                source=config.file_template,
                destination=config.commands_dir,
            ),
            TemplateUnit(
                kind=UnitKind.DIRECTORY,
                source=config.directory_template,
                destination=config.commands_dir,
            ),
        ]
        return cls(config.template_root, units)

    # -- TemplateSource ----------------------------------------------------

    def list_units(self) -> list[TemplateUnit]:
        return list(self._units)

    def list_files(self, unit: TemplateUnit) -> list[str]:
        path = self._unit_path(unit)
        if not unit.is_directory:
            return [""]
        # Sorted so the write order (and any diagnostics) is deterministic.
        return sorted(
            p.relative_to(path).as_posix()
            for p in path.rglob("*")
            if p.is_file()
        )

    def read_raw(self, unit: TemplateUnit, relative_path: str = "") -> str:
        path = self._unit_path(unit)
        if relative_path:
            path = path / relative_path
        if not path.is_file():
            raise TemplateNotFoundError(f"Template not found: {path}")
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise TemplateSyntaxFailure(f"{path}: not a UTF-8 text template") from exc
        except OSError as exc:
            raise TemplateNotFoundError(f"Cannot read template {path}: {exc}") from exc

    # -- Internal ----------------------------------------------------------

    def _unit_path(self, unit: TemplateUnit) -> Path:
        path = self.template_root / unit.source
        if unit.is_directory and not path.is_dir():
            raise TemplateNotFoundError(f"Template directory not found: {path}")
        if not unit.is_directory and not path.is_file():
            raise TemplateNotFoundError(f"Template not found: {path}")
        return path
