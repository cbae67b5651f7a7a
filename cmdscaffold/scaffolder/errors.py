"""Error taxonomy for scaffold runs.

Every error carries a stable ``kind`` string so that a failed unit can be
reported (and asserted on) without matching exception messages.  Only
:class:`InvalidCommandNameError` stops a run before it starts; everything
else is caught per unit by the generator and recorded in the run outcome.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for all scaffolding failures."""

    kind: str = "scaffold_error"


class InvalidCommandNameError(ScaffoldError):
    """The command name is missing or blank."""

    kind = "invalid_input"


class TemplateNotFoundError(ScaffoldError):
    """A template file or template directory does not exist."""

    kind = "template_not_found"


class UnresolvedPlaceholderError(ScaffoldError):
    """A template references a key that is absent from the binding."""

    kind = "unresolved_placeholder"


class TemplateSyntaxFailure(ScaffoldError):
    """A template could not be parsed."""

    kind = "template_syntax"


class WriteFailureError(ScaffoldError):
    """Writing a rendered file to disk failed."""

    kind = "write_failure"


class DestinationExistsError(WriteFailureError):
    """A destination file already exists and the policy forbids replacing it."""

    kind = "destination_exists"


class UnsafePathError(WriteFailureError):
    """A rendered path would escape its destination directory."""

    kind = "unsafe_path"
