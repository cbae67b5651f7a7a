"""Shared pytest fixtures for the command scaffold test suite.

Provides reusable fixtures for:
- Temporary project directories
- A small on-disk template tree with placeholders in contents and paths
- An in-memory template source for injecting faults
- Configs wired to the temporary project
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from cmdscaffold.config import Config
from cmdscaffold.scaffolder.errors import TemplateNotFoundError
from cmdscaffold.scaffolder.models import TemplateUnit, UnitKind


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Temporary project root that commands are generated into."""
    project_dir = tmp_path / "test-project"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """A template tree shaped like the bundled one, plus extra cases.

    Layout::

        lib/commands/create.liquid
        lib/commands/create/build.liquid
        lib/commands/create/check.liquid
        lib/commands/create/<%= commandName %>_helper.liquid.j2
        lib/commands/create/nested/notes.md
    """
    root = tmp_path / "templates"
    commands = root / "lib" / "commands"
    tree = commands / "create"
    (tree / "nested").mkdir(parents=True)

    (commands / "create.liquid").write_text(
        textwrap.dedent("""\
            {% liquid
              function object = 'commands/<%= commandName %>/build', object: object
              function object = 'commands/<%= commandName %>/check', object: object
              return object
            %}
            """),
        encoding="utf-8",
    )
    (tree / "build.liquid").write_text(
        "# build <%= commandName %> into <%= commandNamePlural %>\n{{ object | json }}\n",
        encoding="utf-8",
    )
    (tree / "check.liquid").write_text(
        "# check <%= commandNameSingular %>\n{% return object %}\n",
        encoding="utf-8",
    )
    (tree / "<%= commandName %>_helper.liquid.j2").write_text(
        "helper for <%= commandName | pascal_case %>\n",
        encoding="utf-8",
    )
    (tree / "nested" / "notes.md").write_text(
        "<%# template comment %>Notes about <%= commandNameSlug %>.\n",
        encoding="utf-8",
    )
    yield root


@pytest.fixture
def config(tmp_project_dir: Path, template_root: Path) -> Config:
    """Config pointing at the temporary project and template tree."""
    return Config(project_root=tmp_project_dir, template_root=template_root)


@pytest.fixture
def default_units() -> list[TemplateUnit]:
    """The two units of a standard run, in write order."""
    return [
        TemplateUnit(kind=UnitKind.FILE, source="lib/commands/create.liquid"),
        TemplateUnit(kind=UnitKind.DIRECTORY, source="lib/commands/create"),
    ]


# ---------------------------------------------------------------------------
# In-memory template source
# ---------------------------------------------------------------------------


class InMemoryTemplateSource:
    """TemplateSource backed by dicts, for tests that need odd templates.

    ``files`` maps a unit source to either a string (file unit) or a dict
    of relative path -> text (directory unit).  Sources absent from
    ``files`` raise ``TemplateNotFoundError``.
    """

    def __init__(self, units: list[TemplateUnit], files: dict[str, object]) -> None:
        self.units = units
        self.files = files
        self.reads: list[tuple[str, str]] = []

    def list_units(self) -> list[TemplateUnit]:
        return list(self.units)

    def list_files(self, unit: TemplateUnit) -> list[str]:
        entry = self._entry(unit)
        if isinstance(entry, dict):
            return sorted(entry)
        return [""]

    def read_raw(self, unit: TemplateUnit, relative_path: str = "") -> str:
        entry = self._entry(unit)
        self.reads.append((unit.source, relative_path))
        if isinstance(entry, dict):
            return entry[relative_path]
        return entry

    def _entry(self, unit: TemplateUnit) -> object:
        if unit.source not in self.files:
            raise TemplateNotFoundError(f"Template not found: {unit.source}")
        return self.files[unit.source]


@pytest.fixture
def memory_source_factory():
    """Factory building an ``InMemoryTemplateSource`` for the default units.

    Usage::

        def test_something(memory_source_factory):
            source = memory_source_factory(
                file_text="<%= commandName %>",
                dir_files={"a.txt": "x"},
            )
    """
    def factory(
        file_text: str | None = "<%= commandName %>\n",
        dir_files: dict[str, str] | None = None,
    ) -> InMemoryTemplateSource:
        units = [
            TemplateUnit(kind=UnitKind.FILE, source="lib/commands/create.liquid"),
            TemplateUnit(kind=UnitKind.DIRECTORY, source="lib/commands/create"),
        ]
        files: dict[str, object] = {}
        if file_text is not None:
            files["lib/commands/create.liquid"] = file_text
        if dir_files is not None:
            files["lib/commands/create"] = dict(dir_files)
        return InMemoryTemplateSource(units, files)

    return factory
