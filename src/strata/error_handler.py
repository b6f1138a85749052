"""Error handlers: last-resort renderers for recoverable view errors.

When a section, partial or template cannot be rendered and the caller did
not ask to ignore unknowns, the view hands the error to the context's
handler and returns whatever the handler produces. Handlers must always
return a string; raising from ``handle_view_error`` is a contract violation.

"""

from __future__ import annotations

import html
import logging
from typing import Protocol

from strata import terminal
from strata.exceptions import ViewError

logger = logging.getLogger(__name__)


class ErrorHandler(Protocol):
    def handle_view_error(self, error: Exception) -> str: ...


def describe(error: Exception) -> str:
    """Plain-text diagnostic for an error, without ANSI colours."""
    if isinstance(error, ViewError):
        return terminal.strip_colors(error.format_compact())
    return f"{type(error).__name__}: {error}"


class TolerantErrorHandler:
    """Log the error and render it inline as a comment.

    Args:
        template: Format string receiving ``message``; the message is
            HTML-escaped first so it cannot break out of the comment

    Example:
            >>> TolerantErrorHandler().handle_view_error(ChildNotFoundError("nav"))
            "<!-- View error: S-RUN-001: Section 'nav' not found in &lt;template&gt; -->"

    """

    __slots__ = ("template",)

    def __init__(self, template: str = "<!-- View error: {message} -->"):
        self.template = template

    def handle_view_error(self, error: Exception) -> str:
        message = describe(error)
        logger.warning(f"Recovered from view error: {message}")
        return self.template.format(message=html.escape(message.replace("\n", " | "), quote=False))


class QuietErrorHandler:
    """Log the error and render nothing."""

    __slots__ = ()

    def handle_view_error(self, error: Exception) -> str:
        logger.warning(f"Suppressed view error: {describe(error)}")
        return ""
