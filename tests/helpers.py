"""Shared test doubles for Strata tests."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from strata import (
    ChildNotFoundError,
    DictLoader,
    Node,
    ParsedTemplate,
    RenderingContext,
    static_builder,
)


@dataclass(frozen=True, slots=True)
class Probe(Node):
    """Test node that calls ``callback(context)`` when evaluated and outputs nothing."""

    callback: Callable[[RenderingContext], Any]

    def evaluate(self, context: RenderingContext) -> str:
        self.callback(context)
        return ""


@dataclass(frozen=True, slots=True)
class Explode(Node):
    """Test node whose evaluation raises ``error``."""

    error: Exception

    def evaluate(self, context: RenderingContext) -> str:
        raise self.error


class TreeRegistry:
    """Serve prebuilt component trees through DictLoaders and a builder.

    Loaders hand out a token as the "source" of each file; the builder maps
    tokens back to trees. Plain strings are served as real source text, which
    lets tests exercise ``{parsing off}`` and the static builder.
    """

    def __init__(self) -> None:
        self.trees: dict[str, ParsedTemplate] = {}
        self.builds: list[str] = []

    def loader(self, kind: str, files: dict[str, ParsedTemplate | str]) -> DictLoader:
        sources: dict[str, str] = {}
        for name, tree in files.items():
            if isinstance(tree, str):
                sources[name] = tree
            else:
                token = f"@{kind}:{name}"
                self.trees[token] = tree
                sources[name] = token
        return DictLoader(sources)

    def build(self, source: str, identifier: str) -> ParsedTemplate:
        self.builds.append(identifier)
        if source in self.trees:
            return self.trees[source]
        return static_builder(source, identifier)


class RecordingErrorHandler:
    """Error handler that remembers every error and renders a fixed marker."""

    def __init__(self, output: str = "[error]") -> None:
        self.output = output
        self.errors: list[Exception] = []

    def handle_view_error(self, error: Exception) -> str:
        self.errors.append(error)
        return self.output


def tree(identifier: str, *body: Node, **arguments: Any) -> ParsedTemplate:
    """Shorthand for a ParsedTemplate root."""
    return ParsedTemplate(identifier, body, arguments)


@dataclass(frozen=True, slots=True)
class RawInclude(Node):
    """Test node that resolves a partial itself and evaluates it inline."""

    partial: str

    def evaluate(self, context: RenderingContext) -> str:
        resolver = context.require_view().resolver
        return resolver.resolve_partial(self.partial).evaluate(context)


@dataclass(frozen=True, slots=True)
class StrictArguments(ParsedTemplate):
    """Root whose argument binding fails with a missing-child error."""

    def bind_arguments(self, context: RenderingContext) -> dict[str, Any]:
        raise ChildNotFoundError("argument", self.identifier)
