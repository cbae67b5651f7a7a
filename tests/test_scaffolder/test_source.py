"""Tests for the filesystem template source.

Covers:
- Units built from the config, in write order
- File listing for file and directory units
- Reading raw text and missing-template errors
- Protocol conformance
"""

from __future__ import annotations

from pathlib import Path

import pytest

from cmdscaffold.config import Config
from cmdscaffold.scaffolder.errors import TemplateNotFoundError, TemplateSyntaxFailure
from cmdscaffold.scaffolder.models import TemplateUnit, UnitKind
from cmdscaffold.scaffolder.source import FileSystemTemplateSource, TemplateSource


pytestmark = pytest.mark.unit


class TestFromConfig:
    def test_units_in_order(self, config: Config):
        units = FileSystemTemplateSource.from_config(config).list_units()
        assert [u.kind for u in units] == [UnitKind.FILE, UnitKind.DIRECTORY]
        assert units[0].source == "lib/commands/create.liquid"
        assert units[1].source == "lib/commands/create"
        assert all(u.destination == "app/lib/commands" for u in units)

    def test_custom_commands_dir(self, template_root: Path):
        config = Config(template_root=template_root, commands_dir="modules/x/commands")
        units = FileSystemTemplateSource.from_config(config).list_units()
        assert {u.destination for u in units} == {"modules/x/commands"}

    def test_satisfies_protocol(self, config: Config):
        assert isinstance(FileSystemTemplateSource.from_config(config), TemplateSource)

    def test_list_units_returns_copy(self, config: Config):
        source = FileSystemTemplateSource.from_config(config)
        source.list_units().clear()
        assert len(source.list_units()) == 2


class TestListFiles:
    def test_file_unit(self, template_root: Path):
        source = FileSystemTemplateSource(template_root)
        unit = TemplateUnit(kind=UnitKind.FILE, source="lib/commands/create.liquid")
        assert source.list_files(unit) == [""]

    def test_directory_unit_recursive_sorted(self, template_root: Path):
        source = FileSystemTemplateSource(template_root)
        unit = TemplateUnit(kind=UnitKind.DIRECTORY, source="lib/commands/create")
        assert source.list_files(unit) == [
            "<%= commandName %>_helper.liquid.j2",
            "build.liquid",
            "check.liquid",
            "nested/notes.md",
        ]

    def test_missing_directory(self, template_root: Path):
        source = FileSystemTemplateSource(template_root)
        unit = TemplateUnit(kind=UnitKind.DIRECTORY, source="lib/commands/nope")
        with pytest.raises(TemplateNotFoundError):
            source.list_files(unit)

    def test_file_where_directory_expected(self, template_root: Path):
        source = FileSystemTemplateSource(template_root)
        unit = TemplateUnit(kind=UnitKind.DIRECTORY, source="lib/commands/create.liquid")
        with pytest.raises(TemplateNotFoundError):
            source.list_files(unit)


class TestReadRaw:
    def test_reads_file_unit(self, template_root: Path):
        source = FileSystemTemplateSource(template_root)
        unit = TemplateUnit(kind=UnitKind.FILE, source="lib/commands/create.liquid")
        assert "<%= commandName %>" in source.read_raw(unit)

    def test_reads_directory_member(self, template_root: Path):
        source = FileSystemTemplateSource(template_root)
        unit = TemplateUnit(kind=UnitKind.DIRECTORY, source="lib/commands/create")
        assert source.read_raw(unit, "nested/notes.md").startswith("<%#")

    def test_missing_member(self, template_root: Path):
        source = FileSystemTemplateSource(template_root)
        unit = TemplateUnit(kind=UnitKind.DIRECTORY, source="lib/commands/create")
        with pytest.raises(TemplateNotFoundError):
            source.read_raw(unit, "missing.liquid")

    def test_binary_template_rejected(self, template_root: Path):
        (template_root / "lib" / "commands" / "create" / "logo.png").write_bytes(b"\x89PNG\xff\xfe")
        source = FileSystemTemplateSource(template_root)
        unit = TemplateUnit(kind=UnitKind.DIRECTORY, source="lib/commands/create")
        with pytest.raises(TemplateSyntaxFailure):
            source.read_raw(unit, "logo.png")
