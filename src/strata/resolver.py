"""Resolve logical names to parsed templates, caching by ResolutionKey.

The resolver is the only state shared between renders. It maps
``(name, action, kind)`` to one ParsedTemplate for its lifetime:

    ```
    resolve(TEMPLATE, "Blog", "Show")  →  ResolutionKey("Blog", "Show", TEMPLATE)
    resolve(LAYOUT, "Default")         →  ResolutionKey("Default", None, LAYOUT)
    resolve(PARTIAL, "Card")           →  ResolutionKey("Card", None, PARTIAL)
    ```

On a miss it asks TemplatePaths for the identifier and a lazy source
supplier, hands both to the parser, and stores the result.

Thread-Safety:
No lock is taken. Two threads missing the same key may both parse, but the
store uses ``dict.setdefault`` so both return the same cached handle.
Parsing is a pure function of source text, so the duplicate work is the only
cost.

"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import NamedTuple

from strata.nodes import ParsedTemplate
from strata.parser import TemplateParser
from strata.paths import TemplatePaths
from strata.session import TemplateKind

logger = logging.getLogger(__name__)


class ResolutionKey(NamedTuple):
    name: str
    action: str | None
    kind: TemplateKind


class TemplateResolver:
    """Cached name → ParsedTemplate resolution.

    Attributes:
        paths: TemplatePaths used to locate sources
        parser: TemplateParser used on cache misses
        stats: ``{"hits": int, "misses": int}`` counters

    Example:
            >>> resolver = TemplateResolver(paths, TemplateParser())
            >>> first = resolver.resolve_template("Blog", "Show")
            >>> resolver.resolve_template("Blog", "Show") is first
            True

    """

    __slots__ = ("_cache", "parser", "paths", "stats")

    def __init__(self, paths: TemplatePaths, parser: TemplateParser):
        self.paths = paths
        self.parser = parser
        self._cache: dict[ResolutionKey, ParsedTemplate] = {}
        self.stats: dict[str, int] = {"hits": 0, "misses": 0}

    def resolve(self, kind: TemplateKind, name: str, action: str | None = None) -> ParsedTemplate:
        """Return the parsed template for a logical name.

        Args:
            kind: What is being resolved
            name: Controller name for templates, else the layout/partial name
            action: Action name; only used for ``TemplateKind.TEMPLATE``

        Raises:
            TemplateNotFoundError: If no source exists for the name
            PassthroughSource: If the source opts out of parsing (not cached)
        """
        key = ResolutionKey(name, action if kind is TemplateKind.TEMPLATE else None, kind)
        cached = self._cache.get(key)
        if cached is not None:
            self.stats["hits"] += 1
            return cached

        self.stats["misses"] += 1
        identifier, supplier = self._locate(key)
        logger.debug(f"Resolving {kind.value} {identifier}")
        parsed = self.parser.parse(identifier, supplier)
        return self._cache.setdefault(key, parsed)

    def resolve_template(self, controller: str, action: str) -> ParsedTemplate:
        return self.resolve(TemplateKind.TEMPLATE, controller, action)

    def resolve_layout(self, name: str) -> ParsedTemplate:
        return self.resolve(TemplateKind.LAYOUT, name)

    def resolve_partial(self, name: str) -> ParsedTemplate:
        return self.resolve(TemplateKind.PARTIAL, name)

    def clear(self) -> None:
        """Drop every cached template and reset the counters."""
        self._cache.clear()
        self.stats = {"hits": 0, "misses": 0}

    def _locate(self, key: ResolutionKey) -> tuple[str, Callable[[], str]]:
        paths = self.paths
        if key.kind is TemplateKind.TEMPLATE:
            action = key.action or ""
            return (
                paths.template_identifier(key.name, action),
                lambda: paths.template_source(key.name, action),
            )
        if key.kind is TemplateKind.LAYOUT:
            return paths.layout_identifier(key.name), lambda: paths.layout_source(key.name)
        return paths.partial_identifier(key.name), lambda: paths.partial_source(key.name)

    def __contains__(self, key: object) -> bool:
        return key in self._cache

    def __len__(self) -> int:
        return len(self._cache)
