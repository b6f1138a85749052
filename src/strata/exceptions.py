"""Exceptions for the Strata view layer.

Exception Hierarchy:
ViewError (base)
├── TemplateNotFoundError     # No source for a template, layout or partial
├── ChildNotFoundError        # Named child (section, layoutName) missing
├── InvalidSectionError       # Section addressed with an unusable name
└── StackUnderflowError       # stop_rendering() without start_rendering()

PassthroughSource is *not* a ViewError. The parser raises it to
say "this source is not templated, hand it back verbatim", and the view turns
it into a result variant at the nearest entry point.

Recoverable errors (the first three) never leave ``render``,
``render_section`` or ``render_partial``: they are either ignored (empty
output) or handed to the context's error handler. StackUnderflowError marks a
broken start/stop pairing and is never caught.

Example:
    ```
    S-RUN-001: Section 'sidebr' not found in template:Blog/Show.html. Did you mean 'sidebar'?
    Render stack:
      • layout template:Blog/Show.html
    ```

"""

from __future__ import annotations

from difflib import get_close_matches
from enum import Enum

from strata import terminal


class ErrorCode(Enum):
    """Searchable error codes for view errors.

    Format: S-{CATEGORY}-{NUMBER}
    Categories: TPL (template loading), RUN (rendering), INT (internal)
    """

    TEMPLATE_NOT_FOUND = "S-TPL-001"

    CHILD_NOT_FOUND = "S-RUN-001"
    INVALID_SECTION = "S-RUN-002"

    STACK_UNDERFLOW = "S-INT-001"

    @property
    def category(self) -> str:
        """Error category (``'template'``, ``'runtime'`` or ``'internal'``)."""
        prefix = self.value.split("-")[1]
        return {
            "TPL": "template",
            "RUN": "runtime",
            "INT": "internal",
        }.get(prefix, "unknown")


def format_render_stack(stack: list[tuple[str, str]] | None) -> str:
    """Format the render stack for error messages.

    Args:
        stack: ``(kind, identifier)`` pairs, outermost frame first

    Example:
        >>> print(format_render_stack([("layout", "template:Blog/Show.html")]))
        Render stack:
          • layout template:Blog/Show.html
    """
    if not stack:
        return ""

    lines = [terminal.dim_text("Render stack:")]
    for kind, identifier in stack:
        lines.append(f"  • {terminal.kind(kind)} {terminal.location(identifier)}")
    return "\n".join(lines)


class ViewError(Exception):
    """Base exception for all view errors.

    Attributes:
        message: Error description without location decoration
        code: Optional ErrorCode for searchable identification
        render_stack: ``(kind, identifier)`` pairs describing where rendering
            was when the error surfaced; filled in by the view before the
            error reaches an error handler
    """

    code: ErrorCode | None = None

    def __init__(self, message: str, *, render_stack: list[tuple[str, str]] | None = None):
        self.message = message
        self.render_stack = list(render_stack or [])
        super().__init__(message)

    def format_compact(self) -> str:
        """Format the error as a short multi-line diagnostic.

        Format::

            S-TPL-001: Partial 'Card' not found (looked for 'Card.html')
            Render stack:
              • template template:Default/Index.html
        """
        parts = [terminal.format_error_header(self.code.value if self.code else None, self.message)]
        if self.render_stack:
            parts.append(format_render_stack(self.render_stack))
        return "\n".join(parts)


class TemplateNotFoundError(ViewError):
    """No source could be located for a template, layout or partial.

    Raised by loaders and TemplatePaths. Recoverable: ``render_section`` and
    ``render_partial`` honour ``ignore_unknown`` for it.

    Attributes:
        name: Logical name that was looked up (``None`` when raised by a loader
            that only knows the file name)
    """

    code: ErrorCode | None = ErrorCode.TEMPLATE_NOT_FOUND

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        render_stack: list[tuple[str, str]] | None = None,
    ):
        self.name = name
        super().__init__(message, render_stack=render_stack)


class ChildNotFoundError(ViewError):
    """A parsed template has no child with the requested name.

    Used both for missing sections and for the ``layoutName`` probe, where it
    simply means "this template declares no layout".
    """

    code: ErrorCode | None = ErrorCode.CHILD_NOT_FOUND

    def __init__(
        self,
        name: str,
        identifier: str | None = None,
        available_names: frozenset[str] | None = None,
    ):
        self.name = name
        self.identifier = identifier or "<template>"
        msg = f"Section '{name}' not found in {self.identifier}"
        if available_names:
            matches = get_close_matches(name, sorted(available_names), n=1, cutoff=0.6)
            if matches:
                msg += f". Did you mean '{matches[0]}'?"
        super().__init__(msg)


class InvalidSectionError(ViewError):
    """A section was addressed with a name that cannot identify one."""

    code: ErrorCode | None = ErrorCode.INVALID_SECTION


class StackUnderflowError(ViewError, RuntimeError):
    """``stop_rendering()`` was called on an empty rendering stack."""

    code: ErrorCode | None = ErrorCode.STACK_UNDERFLOW


class PassthroughSource(Exception):
    """Signal that template source must be returned unevaluated.

    Attributes:
        source: The raw content to hand back to the caller
    """

    def __init__(self, source: str):
        self.source = source
        super().__init__("Source is not templated; returning it verbatim")
