"""Rendering stack for one view.

Every nested render (template, layout, section, partial) pushes a
RenderingFrame and pops it when done. The top frame answers "what kind of
thing is being rendered", "which parsed template" and "which context":

    ```
    render()                         [LAYOUT   Blog/Show   base]
      └─ render_section("main")      [TEMPLATE Blog/Show   base]
           └─ render_partial("Card") [PARTIAL  Card        clone]
    ```

An empty stack means nothing is being rendered: the kind is TEMPLATE and
the context is the base context.

Use ``rendering()`` rather than pairing ``start_rendering`` and
``stop_rendering`` by hand; it pops in ``finally`` so every exit path keeps
the stack balanced.

Thread-Safety:
A session belongs to one view and one logical call stack. It takes no locks.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from strata.exceptions import StackUnderflowError

if TYPE_CHECKING:
    from strata.context import RenderingContext
    from strata.nodes import ParsedTemplate
    from strata.resolver import TemplateResolver


class TemplateKind(Enum):
    TEMPLATE = "template"
    PARTIAL = "partial"
    LAYOUT = "layout"


@dataclass(frozen=True, slots=True)
class RenderingFrame:
    kind: TemplateKind
    template: ParsedTemplate
    context: RenderingContext


class RenderSession:
    """LIFO stack of RenderingFrames with base-context fallback.

    Attributes:
        base_context: Context used when the stack is empty
        resolver: Resolver for on-demand template resolution

    """

    __slots__ = ("_stack", "base_context", "resolver")

    def __init__(self, base_context: RenderingContext, resolver: TemplateResolver):
        self.base_context = base_context
        self.resolver = resolver
        self._stack: list[RenderingFrame] = []

    @property
    def depth(self) -> int:
        return len(self._stack)

    def start_rendering(
        self, kind: TemplateKind, template: ParsedTemplate, context: RenderingContext
    ) -> None:
        """Push a frame. Pair with ``stop_rendering()``."""
        self._stack.append(RenderingFrame(kind, template, context))

    def stop_rendering(self) -> None:
        """Pop the top frame.

        Raises:
            StackUnderflowError: If the stack is empty
        """
        if not self._stack:
            raise StackUnderflowError("stop_rendering() called with no active rendering")
        self._stack.pop()

    @contextmanager
    def rendering(
        self, kind: TemplateKind, template: ParsedTemplate, context: RenderingContext
    ) -> Iterator[RenderingFrame]:
        """Push a frame for the duration of the ``with`` block."""
        self.start_rendering(kind, template, context)
        try:
            yield self._stack[-1]
        finally:
            self.stop_rendering()

    def current_kind(self) -> TemplateKind:
        if self._stack:
            return self._stack[-1].kind
        return TemplateKind.TEMPLATE

    def current_context(self) -> RenderingContext:
        if self._stack:
            return self._stack[-1].context
        return self.base_context

    def current_template(self) -> ParsedTemplate:
        """Template of the top frame, resolved on demand when nothing is rendering.

        On an empty stack the template is resolved from the base context's
        controller and action. The result is not pushed.

        Raises:
            TemplateNotFoundError: If on-demand resolution finds no source
            PassthroughSource: If the resolved source opts out of parsing
        """
        if self._stack:
            return self._stack[-1].template
        context = self.base_context
        return self.resolver.resolve_template(context.controller_name, context.controller_action)

    def trace(self) -> list[tuple[str, str]]:
        """``(kind, identifier)`` for each frame, outermost first."""
        return [(frame.kind.value, frame.template.identifier) for frame in self._stack]

    def reset(self, base_context: RenderingContext) -> None:
        """Swap the base context and drop every frame."""
        self.base_context = base_context
        self._stack.clear()
