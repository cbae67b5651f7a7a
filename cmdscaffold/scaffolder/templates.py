"""Jinja2 template rendering for command scaffolding.

Provides the TemplateRenderer class which renders raw template text and
template paths against a parameter binding.  Placeholders use EJS-style
delimiters by default (``<%= commandName %>``) so that the Liquid markup of
the generated files is left alone.  Rendering is strict: a placeholder that
is not in the binding is an error, never an empty string.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateSyntaxError, UndefinedError

from cmdscaffold.config import TemplateSyntax

from .errors import TemplateSyntaxFailure, UnresolvedPlaceholderError, UnsafePathError
from .models import RenderResult, TemplateUnit
from .names import ParameterBinding, camel_case, pascal_case, pluralize, singularize, slugify, snake_case
from .source import TemplateSource


_TEMPLATE_SUFFIX = ".j2"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders template text and template paths for scaffolding.

    Every call is independent: the renderer holds no per-run state, so one
    instance can serve any number of runs.
    """

    def __init__(self, syntax: TemplateSyntax | None = None) -> None:
        self.syntax = syntax or TemplateSyntax()
        self.env = Environment(
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            **self.syntax.environment_options(),
        )
        # Register custom filters
        self.env.filters["slugify"] = slugify
        self.env.filters["pascal_case"] = pascal_case
        self.env.filters["snake_case"] = snake_case
        self.env.filters["camel_case"] = camel_case
        self.env.filters["pluralize"] = pluralize
        self.env.filters["singularize"] = singularize

    # -- String rendering --------------------------------------------------

    def render_string(
        self,
        template_string: str,
        binding: ParameterBinding,
        *,
        name: str = "<string>",
    ) -> str:
        """Render *template_string* with every placeholder substituted.

        Args:
            template_string: Raw template text.
            binding: Placeholder values.
            name: Template name used in error messages.

        Raises:
            TemplateSyntaxFailure: If the template cannot be parsed.
            UnresolvedPlaceholderError: If a placeholder is not in *binding*.
        """
        try:
            template = self.env.from_string(template_string)
        except TemplateSyntaxError as exc:
            raise TemplateSyntaxFailure(
                f"{name}: syntax error on line {exc.lineno}: {exc.message}"
            ) from exc
        return self._render(template, binding, name)

    def render_path(self, relative_path: str, binding: ParameterBinding) -> str:
        """Render placeholders in each segment of a relative template path.

        A trailing ``.j2`` is stripped from the file name.  The result uses
        forward slashes.

        Raises:
            UnsafePathError: If a segment renders to an empty name or to a
                name containing a path separator.
        """
        parts: list[str] = []
        for part in PurePosixPath(relative_path).parts:
            rendered = self.render_string(part, binding, name=relative_path)
            if not rendered or "/" in rendered or "\\" in rendered:
                raise UnsafePathError(
                    f"{relative_path}: segment {part!r} renders to invalid name {rendered!r}"
                )
            parts.append(rendered)
        if parts and parts[-1].endswith(_TEMPLATE_SUFFIX):
            parts[-1] = parts[-1][: -len(_TEMPLATE_SUFFIX)]
        return "/".join(parts)

    # -- Artifact rendering ------------------------------------------------

    def render(
        self,
        raw: str,
        relative_path: str,
        binding: ParameterBinding,
        *,
        name: str | None = None,
    ) -> RenderResult:
        """Render one template artifact: its path (if any) and its content.

        *relative_path* is the file's path inside a template directory, or
        ``""`` for a single-file unit whose destination is named elsewhere.
        """
        name = name or relative_path or "<file>"
        rendered_path = self.render_path(relative_path, binding) if relative_path else ""
        content = self.render_string(raw, binding, name=name)
        return RenderResult(relative_path=rendered_path, content=content)

    def render_unit(
        self,
        source: TemplateSource,
        unit: TemplateUnit,
        binding: ParameterBinding,
    ) -> list[RenderResult]:
        """Render every file of *unit* in memory.

        Nothing is written here: either all files of the unit render or the
        first failure is raised, so a unit is never half-rendered on disk.
        """
        results: list[RenderResult] = []
        for rel in source.list_files(unit):
            raw = source.read_raw(unit, rel)
            where = f"{unit.source}/{rel}" if rel else unit.source
            results.append(self.render(raw, rel, binding, name=where))
        return results

    # -- Internal ----------------------------------------------------------

    def _render(self, template: Any, binding: ParameterBinding, name: str) -> str:
        try:
            return template.render(**binding)
        except UndefinedError as exc:
            raise UnresolvedPlaceholderError(f"{name}: {exc.message}") from exc
