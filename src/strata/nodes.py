"""Component tree evaluated by the view.

A parsed template is an immutable tree of nodes. The view only relies on
three things from it:

- ``evaluate(context)`` renders a node to a string
- ``get_named_child(name)`` finds a section (or the ``layoutName``
  declaration) and raises ChildNotFoundError otherwise
- ``bind_arguments(context)`` resolves declared arguments against a context
  without mutating the tree

Nodes are frozen so a single tree can be shared by every render that
resolves it. All per-render state lives in the RenderingContext.

Structure:
    ```
    ParsedTemplate("template:Blog/Show.html")
    ├── LayoutName("Default")            # outputs nothing
    ├── Section("main")                  # outputs nothing inline
    │   ├── Text("<h1>")
    │   ├── Variable("post.title")
    │   └── RenderPartial("Card", arguments={"item": Variable("post")})
    └── Text("fallback body")
    ```

"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from strata.exceptions import ChildNotFoundError

if TYPE_CHECKING:
    from strata.context import RenderingContext

LAYOUT_NAME = "layoutName"


def resolve_value(value: Any, context: RenderingContext) -> Any:
    """Resolve an argument value: expressions are looked up, literals pass through."""
    if isinstance(value, Variable):
        return value.resolve(context)
    return value


def resolve_arguments(arguments: Mapping[str, Any] | None, context: RenderingContext) -> dict[str, Any]:
    if not arguments:
        return {}
    return {key: resolve_value(value, context) for key, value in arguments.items()}


def to_output(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


@dataclass(frozen=True, slots=True)
class Node:
    """Base class for all component nodes."""

    @property
    def child_name(self) -> str | None:
        """Name under which ``get_named_child`` finds this node, if any."""
        return None

    def evaluate(self, context: RenderingContext) -> str:
        raise NotImplementedError(f"{type(self).__name__} cannot be evaluated")

    def iter_children(self) -> Iterator[Node]:
        return iter(())


def _evaluate_body(body: Sequence[Node], context: RenderingContext) -> str:
    # Declarations (sections, layoutName) render only when addressed by name
    return "".join(
        node.evaluate(context) for node in body if node.child_name is None
    )


@dataclass(frozen=True, slots=True)
class Text(Node):
    """Static text."""

    value: str

    def evaluate(self, context: RenderingContext) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Variable(Node):
    """Variable output: ``{post.title}``."""

    path: str
    default: Any = None

    def resolve(self, context: RenderingContext) -> Any:
        return context.variables.get(self.path, self.default)

    def evaluate(self, context: RenderingContext) -> str:
        return to_output(self.resolve(context))


@dataclass(frozen=True, slots=True)
class Assign(Node):
    """Bind a variable in the context being evaluated: ``{f:variable(...)}``."""

    name: str
    value: Any

    def evaluate(self, context: RenderingContext) -> str:
        context.variables.add(self.name, resolve_value(self.value, context))
        return ""


@dataclass(frozen=True, slots=True)
class LayoutName(Node):
    """Layout declaration: ``{f:layout(name: 'Default')}``.

    ``name`` may be a literal or a Variable; an empty value means no layout.
    """

    name: Any

    @property
    def child_name(self) -> str | None:
        return LAYOUT_NAME

    def bind_arguments(self, context: RenderingContext) -> dict[str, Any]:
        return {"name": resolve_value(self.name, context)}

    def evaluate(self, context: RenderingContext) -> str:
        return ""


@dataclass(frozen=True, slots=True)
class Section(Node):
    """Named section: ``<f:section name="main">...</f:section>``."""

    name: str
    body: Sequence[Node] = ()

    @property
    def child_name(self) -> str | None:
        return self.name

    def evaluate(self, context: RenderingContext) -> str:
        return _evaluate_body(self.body, context)

    def iter_children(self) -> Iterator[Node]:
        return iter(self.body)


@dataclass(frozen=True, slots=True)
class RenderSection(Node):
    """Render a section of the template being rendered: ``<f:render section="main"/>``."""

    section: Any
    arguments: Mapping[str, Any] = field(default_factory=dict)
    optional: bool = False

    def evaluate(self, context: RenderingContext) -> str:
        return to_output(
            context.require_view().render_section(
                resolve_value(self.section, context),
                resolve_arguments(self.arguments, context),
                ignore_unknown=self.optional,
            )
        )


@dataclass(frozen=True, slots=True)
class RenderPartial(Node):
    """Render a partial, optionally one of its sections: ``<f:render partial="Card"/>``."""

    partial: Any
    section: Any = None
    arguments: Mapping[str, Any] = field(default_factory=dict)
    optional: bool = False

    def evaluate(self, context: RenderingContext) -> str:
        return to_output(
            context.require_view().render_partial(
                resolve_value(self.partial, context),
                resolve_value(self.section, context),
                resolve_arguments(self.arguments, context),
                ignore_unknown=self.optional,
            )
        )


@dataclass(frozen=True, slots=True)
class ParsedTemplate(Node):
    """Root of a parsed template, layout or partial.

    Attributes:
        identifier: Identity from TemplatePaths, used in error messages
        body: Top-level nodes
        arguments: Declared arguments with literal or Variable values
    """

    identifier: str
    body: Sequence[Node] = ()
    arguments: Mapping[str, Any] = field(default_factory=dict)

    def evaluate(self, context: RenderingContext) -> str:
        return _evaluate_body(self.body, context)

    def iter_children(self) -> Iterator[Node]:
        return iter(self.body)

    def bind_arguments(self, context: RenderingContext) -> dict[str, Any]:
        return resolve_arguments(self.arguments, context)

    def get_named_child(self, name: str) -> Node:
        """Depth-first search for a declaration named ``name``.

        Raises:
            ChildNotFoundError: If no child carries the name
        """
        for node in self._walk(self):
            if node.child_name == name:
                return node
        available = frozenset(
            n.child_name for n in self._walk(self) if n.child_name and n.child_name != LAYOUT_NAME
        )
        raise ChildNotFoundError(name, self.identifier, available)

    def named_children(self) -> list[str]:
        """Names of all addressable children, in document order."""
        return [n.child_name for n in self._walk(self) if n.child_name is not None]

    @classmethod
    def _walk(cls, node: Node) -> Iterator[Node]:
        for child in node.iter_children():
            yield child
            yield from cls._walk(child)
