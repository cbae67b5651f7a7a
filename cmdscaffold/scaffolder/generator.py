"""Main scaffolding orchestrator.

Takes a command name and writes the command skeleton: one single-file
template rendered to ``<commands_dir>/<name>.<ext>`` and one template
directory mirrored to ``<commands_dir>/<name>/``.

Units are processed one after another.  A unit that fails (missing template,
unresolved placeholder, write error, collision) is recorded in the returned
``RunOutcome`` and reported on the console; the remaining units are still
attempted and files already written are left in place.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from rich.markup import escape

from cmdscaffold.config import CollisionPolicy, Config
from cmdscaffold.utils import console, display_path, print_error, print_warning

from .destinations import mirror, output_extension, resolve_destination
from .errors import DestinationExistsError, ScaffoldError, WriteFailureError
from .models import (
    RenderResult,
    RunOutcome,
    ScaffoldRequest,
    TemplateUnit,
    UnitOutcome,
    UnitStatus,
)
from .names import ParameterBinding, build_binding, derive_names
from .source import FileSystemTemplateSource, TemplateSource
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class CommandGenerator:
    """Renders and writes the scaffold for one command name per run.

    Collaborators are injected so tests (and other front ends) can swap the
    template source or renderer:

    - ``source`` lists the template units and reads their raw text
    - ``renderer`` substitutes placeholders in contents and paths
    """

    def __init__(
        self,
        config: Config | None = None,
        source: TemplateSource | None = None,
        renderer: TemplateRenderer | None = None,
        *,
        verbose: bool = False,
    ) -> None:
        self.config = config or Config()
        self.source = source or FileSystemTemplateSource.from_config(self.config)
        self.renderer = renderer or TemplateRenderer(self.config.syntax)
        self.verbose = verbose

    # -- Public API --------------------------------------------------------

    async def generate(self, command_name: str) -> RunOutcome:
        """Validate *command_name* and run the scaffold for it.

        Raises:
            InvalidCommandNameError: If the name is empty.  Nothing is
                written in that case.
        """
        request = ScaffoldRequest(command_name=command_name)
        return await self.run(request)

    async def run(
        self,
        request: ScaffoldRequest,
        units: list[TemplateUnit] | None = None,
    ) -> RunOutcome:
        """Render and write every unit for *request*.

        Args:
            request: The validated request.
            units: Units to process, in order.  Defaults to the template
                source's units (single file first, then directory).

        Returns:
            The aggregated outcome.  Per-unit failures are recorded there
            and never raised.
        """
        # The binding is derived once and shared by every unit of the run.
        binding = build_binding(derive_names(request.command_name))
        if units is None:
            units = self.source.list_units()

        outcome = RunOutcome(command_name=request.command_name)
        for unit in units:
            result = await self._run_unit(unit, request.command_name, binding)
            outcome.units.append(result)
        return outcome

    # -- Per-unit pipeline -------------------------------------------------

    async def _run_unit(
        self,
        unit: TemplateUnit,
        command_name: str,
        binding: ParameterBinding,
    ) -> UnitOutcome:
        written: list[Path] = []
        skipped: list[Path] = []
        unchanged: list[Path] = []
        try:
            rendered = self.renderer.render_unit(self.source, unit, binding)
            root, targets = self._resolve_targets(unit, command_name, rendered)
            await self._write_targets(unit, root, targets, written, skipped, unchanged)
        except ScaffoldError as exc:
            print_error(f"Failed to generate {escape(unit.label)}: {escape(str(exc))}")
            return UnitOutcome(
                unit=unit,
                status=UnitStatus.FAILED,
                written=written,
                skipped=skipped,
                unchanged=unchanged,
                error_kind=exc.kind,
                error=str(exc),
            )

        status = UnitStatus.SKIPPED if skipped and not (written or unchanged) else UnitStatus.WRITTEN
        return UnitOutcome(
            unit=unit,
            status=status,
            written=written,
            skipped=skipped,
            unchanged=unchanged,
        )

    def _resolve_targets(
        self,
        unit: TemplateUnit,
        command_name: str,
        rendered: list[RenderResult],
    ) -> tuple[Path, list[tuple[Path, str]]]:
        """Map rendered artifacts to concrete destination files."""
        base = self.config.destination_base(unit.destination)
        if unit.is_directory:
            root = resolve_destination(base, command_name, is_directory=True)
            return root, [(mirror(root, r.relative_path), r.content) for r in rendered]

        dest = resolve_destination(
            base,
            command_name,
            is_directory=False,
            extension=output_extension(unit.source),
        )
        return dest, [(dest, r.content) for r in rendered]

    async def _write_targets(
        self,
        unit: TemplateUnit,
        root: Path,
        targets: list[tuple[Path, str]],
        written: list[Path],
        skipped: list[Path],
        unchanged: list[Path],
    ) -> None:
        policy = self.config.on_existing

        existing: dict[Path, bool] = {}
        for path, content in targets:
            state = await self._guarded(asyncio.to_thread(_existing_state, path, content), path)
            if state is not None:
                existing[path] = state

        conflicts = [p for p, identical in existing.items() if not identical]
        if conflicts and policy is CollisionPolicy.FAIL:
            shown = ", ".join(self._display(p) for p in conflicts[:3])
            raise DestinationExistsError(
                f"{len(conflicts)} destination file(s) already exist: {shown}"
            )

        if unit.is_directory:
            await self._guarded(asyncio.to_thread(root.mkdir, parents=True, exist_ok=True), root)

        for path, content in targets:
            if existing.get(path) is True:
                unchanged.append(path)
                self._report("identical", path, "blue")
                continue
            if path in existing and policy is CollisionPolicy.SKIP:
                skipped.append(path)
                print_warning(f"skip {escape(self._display(path))} (already exists)")
                continue
            await self._guarded(asyncio.to_thread(_write_file, path, content), path)
            written.append(path)
            self._report("force" if path in existing else "create", path, "green")

    # -- Helpers -----------------------------------------------------------

    async def _guarded(self, awaitable, path: Path):
        """Await a filesystem call, mapping OS-level failures to ``WriteFailureError``.

        pathlib raises ``ValueError`` for paths it cannot pass to the OS (an
        embedded NUL byte, for instance).
        """
        try:
            return await awaitable
        except (OSError, ValueError) as exc:
            raise WriteFailureError(f"Could not write {path}: {exc}") from exc

    def _display(self, path: Path) -> str:
        return display_path(path, self.config.project_root)

    def _report(self, action: str, path: Path, color: str) -> None:
        if self.verbose:
            console.print(f"[{color}]{action:>9}[/{color}] {escape(self._display(path))}")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _existing_state(path: Path, content: str) -> bool | None:
    """Return ``None`` if *path* is absent, else whether it already holds *content*."""
    if not path.exists():
        return None
    if not path.is_file():
        return False
    try:
        return path.read_text(encoding="utf-8") == content
    except (OSError, UnicodeDecodeError):
        return False


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
