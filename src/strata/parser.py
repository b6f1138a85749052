"""Parser front for the view.

Strata does not implement template syntax. TemplateParser sits between the
resolver and whatever turns source text into a component tree (the
*builder*), and handles the one directive the view itself cares about:

    ```
    {parsing off}
    <p>Everything below is returned to the caller as-is.</p>
    ```

A source whose first line is ``{parsing off}`` raises PassthroughSource with
the rest of the source. Every other source goes to the builder.

"""

from __future__ import annotations

import logging
from collections.abc import Callable

from strata.exceptions import PassthroughSource
from strata.nodes import ParsedTemplate, Text

logger = logging.getLogger(__name__)

PASSTHROUGH_DIRECTIVE = "{parsing off}"

Builder = Callable[[str, str], ParsedTemplate]


def static_builder(source: str, identifier: str) -> ParsedTemplate:
    """Build a tree holding the whole source as static text."""
    return ParsedTemplate(identifier, (Text(source),))


class TemplateParser:
    """Turn source into a ParsedTemplate through a builder callable.

    Args:
        builder: ``builder(source, identifier) -> ParsedTemplate``

    Example:
            >>> parser = TemplateParser()
            >>> parser.parse("partial:Card.html", lambda: "<div/>").evaluate(ctx)
            '<div/>'
            >>> parser.parse("partial:Raw.html", lambda: "{parsing off}\\n{raw}")
        PassthroughSource: Source is not templated; returning it verbatim

    """

    __slots__ = ("_builder",)

    def __init__(self, builder: Builder = static_builder):
        self._builder = builder

    def parse(self, identifier: str, source_supplier: Callable[[], str]) -> ParsedTemplate:
        """Read the source lazily and build its tree.

        Raises:
            PassthroughSource: If the source opts out of parsing
            TemplateNotFoundError: Propagated from ``source_supplier``
        """
        source = source_supplier()
        head, newline, rest = source.partition("\n")
        if head.strip() == PASSTHROUGH_DIRECTIVE:
            logger.debug(f"{identifier} has parsing disabled; passing source through")
            raise PassthroughSource(rest if newline else "")
        return self._builder(source, identifier)
