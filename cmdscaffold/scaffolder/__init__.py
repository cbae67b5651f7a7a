"""Command scaffolder -- generates a command file and its phase directory.

Given a command name, this module renders the ``create.liquid`` template to
``app/lib/commands/<name>.liquid`` and mirrors the ``create/`` template
directory (build and check phases) to ``app/lib/commands/<name>/``.

Quick usage::

    from cmdscaffold.scaffolder import CommandGenerator

    generator = CommandGenerator()
    outcome = await generator.generate("ship")
    assert outcome.success
"""

from cmdscaffold.scaffolder.generator import CommandGenerator
from cmdscaffold.scaffolder.models import RunOutcome, ScaffoldRequest, TemplateUnit, UnitKind
from cmdscaffold.scaffolder.source import FileSystemTemplateSource, TemplateSource
from cmdscaffold.scaffolder.templates import TemplateRenderer

__all__ = [
    "CommandGenerator",
    "FileSystemTemplateSource",
    "RunOutcome",
    "ScaffoldRequest",
    "TemplateRenderer",
    "TemplateSource",
    "TemplateUnit",
    "UnitKind",
]
