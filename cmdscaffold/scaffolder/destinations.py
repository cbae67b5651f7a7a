"""Destination path resolution.

Pure path arithmetic: nothing here touches the filesystem.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from .errors import UnsafePathError


def resolve_destination(
    base: str | Path,
    command_name: str,
    *,
    is_directory: bool,
    extension: str = "",
) -> Path:
    """Compute where a unit's output goes.

    Args:
        base: Destination base directory (e.g. ``<project>/app/lib/commands``).
        command_name: The verbatim command name.
        is_directory: ``True`` for a template directory unit.
        extension: File extension including the dot (e.g. ``".liquid"``),
            taken from the single-file template's own name.  Ignored for
            directory units.

    Returns:
        ``<base>/<command_name><extension>`` for a file unit, or
        ``<base>/<command_name>`` for a directory unit.
    """
    if is_directory:
        return Path(base) / command_name
    return Path(base) / f"{command_name}{extension}"


def output_extension(template_name: str) -> str:
    """Return the extension a rendered template keeps.

    A trailing ``.j2`` is dropped first, so ``create.liquid.j2`` and
    ``create.liquid`` both give ``".liquid"``.
    """
    name = PurePosixPath(template_name).name
    if name.endswith(".j2"):
        name = name[: -len(".j2")]
    return PurePosixPath(name).suffix


def mirror(destination_root: str | Path, relative_path: str) -> Path:
    """Place a rendered file of a directory unit under *destination_root*.

    Raises:
        UnsafePathError: If *relative_path* is empty, absolute, or climbs out
            of the destination with ``..``.
    """
    rel = PurePosixPath(relative_path)
    if not relative_path or rel.is_absolute() or ".." in rel.parts:
        raise UnsafePathError(
            f"Rendered path {relative_path!r} escapes destination {destination_root}"
        )
    return Path(destination_root).joinpath(*rel.parts)
