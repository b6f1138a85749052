"""TemplateView — layout, section and partial rendering over a render stack.

Three entry points drive every render:

    ```
    render(action)            resolve template → layoutName?
                                ├─ yes: push LAYOUT, evaluate the layout
                                └─ no:  push TEMPLATE, evaluate the template
    render_section(name)      push (TEMPLATE if in LAYOUT else current kind),
                              evaluate the named section of the current template
    render_partial(name)      resolve partial, push PARTIAL, evaluate it
                              (or one of its sections)
    ```

Scoping:
    - A section rendered from a layout runs in the layout's own context.
      Assignments made inside it are visible to the layout afterwards.
    - Any other section gets a clone of the current context overlaid with
      its variables.
    - A partial always gets a clone; its variables are overlaid on the clone
      (directly, or through the section render when a section is named).

Error Recovery:
Every entry point first *obtains* what it renders, folding the outcome into
``Resolved`` / ``Passthrough`` / ``Failed`` (see ``strata.outcome``):

    - Passthrough: the raw source is the output
    - Failed with an ignorable error and ``ignore_unknown``: ``""``
    - any other Failed: the context's error handler renders the error

What counts as ignorable depends on the step: a missing template for the
current template, a missing or blank section name for a section, a missing
partial or blank section name for a partial.

A ``{parsing off}`` source reached while evaluating (a custom node resolving
raw source itself) stops at the nearest entry point too: its source replaces
that entry point's output.

Nothing is pushed until the obtain step has succeeded, and every push goes
through ``RenderSession.rendering()``, so the stack is balanced on all exit
paths. Only StackUnderflowError and exceptions raised by evaluation itself
propagate to the caller.

"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from strata.context import RenderingContext
from strata.exceptions import (
    ChildNotFoundError,
    InvalidSectionError,
    PassthroughSource,
    TemplateNotFoundError,
    ViewError,
)
from strata.nodes import LAYOUT_NAME, Node, ParsedTemplate, to_output
from strata.outcome import Failed, Outcome, Passthrough, Resolved, attempt
from strata.paths import TemplatePaths
from strata.resolver import TemplateResolver
from strata.session import RenderSession, TemplateKind

logger = logging.getLogger(__name__)

# Failures that ``ignore_unknown`` turns into empty output, per resolution step
IGNORABLE_TEMPLATE_ERRORS: tuple[type[Exception], ...] = (TemplateNotFoundError,)
IGNORABLE_SECTION_ERRORS: tuple[type[Exception], ...] = (ChildNotFoundError, InvalidSectionError)
IGNORABLE_PARTIAL_ERRORS: tuple[type[Exception], ...] = (TemplateNotFoundError, InvalidSectionError)


class TemplateView:
    """Render templates with layouts, sections and partials.

    Attributes:
        rendering_context: Base context (variables, collaborators, controller/action)
        resolver: Cached name → parsed template resolution
        session: Rendering stack

    Example:
            >>> view = TemplateView(RenderingContext(
            ...     template_paths=paths, controller_name="Blog", controller_action="Index",
            ... ))
            >>> view.assign("posts", posts).render("show")  # renders Blog/Show.html

    """

    __slots__ = ("_base_context", "_resolver", "_session")

    def __init__(self, context: RenderingContext | None = None):
        if context is None:
            context = RenderingContext(controller_name="Default", controller_action="Default")
        self._resolver = TemplateResolver(context.template_paths, context.parser)
        self._session = RenderSession(context, self._resolver)
        self.set_rendering_context(context)

    # ------------------------------------------------------------------
    # Context management
    # ------------------------------------------------------------------

    def initialize_rendering_context(self) -> None:
        """Attach this view to the base context.

        Override to adjust the context before rendering; call super().
        """
        self._base_context.view = self

    @property
    def rendering_context(self) -> RenderingContext:
        return self._base_context

    @property
    def template_paths(self) -> TemplatePaths:
        return self._base_context.template_paths

    @property
    def resolver(self) -> TemplateResolver:
        return self._resolver

    @property
    def session(self) -> RenderSession:
        return self._session

    def set_rendering_context(self, context: RenderingContext) -> None:
        """Install a new base context.

        The rendering stack is emptied. The resolver cache survives when the
        new context uses the same paths and parser.
        """
        resolver = self._resolver
        if resolver.paths is not context.template_paths or resolver.parser is not context.parser:
            resolver = TemplateResolver(context.template_paths, context.parser)
            self._resolver = resolver
            self._session.resolver = resolver
        self._base_context = context
        self._session.reset(context)
        self.initialize_rendering_context()

    def assign(self, key: str, value: Any) -> TemplateView:
        """Set a variable on the base context. Chainable."""
        self._base_context.variables.add(key, value)
        return self

    def assign_multiple(self, values: Mapping[str, Any]) -> TemplateView:
        """Set several variables on the base context. Chainable."""
        variables = self._base_context.variables
        for key, value in values.items():
            variables.add(key, value)
        return self

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def render(self, action_name: str | None = None) -> str:
        """Render the current template, wrapped in its layout when it declares one.

        Args:
            action_name: Render this action's template instead of the one
                configured on the context. The first character is upper-cased.

        Returns:
            Rendered output, raw passthrough source, or error handler output
        """
        session = self.session
        context = session.current_context()
        if action_name:
            context.controller_action = action_name[0].upper() + action_name[1:]

        obtained = attempt(lambda: self._bind(session.current_template(), context))
        if not isinstance(obtained, Resolved):
            return self._settle(obtained, context)
        template = obtained.value

        base = session.base_context
        layout_name = self._layout_name(template, context)
        if layout_name:
            layout = attempt(lambda: self._bind(self.resolver.resolve_layout(layout_name), context))
            if not isinstance(layout, Resolved):
                return self._settle(layout, context)
            logger.debug(f"Rendering {template.identifier} through layout '{layout_name}'")
            with session.rendering(TemplateKind.LAYOUT, template, base):
                return self._evaluate(layout.value, base)

        with session.rendering(TemplateKind.TEMPLATE, template, base):
            return self._evaluate(template, base)

    def render_section(
        self,
        section_name: str,
        variables: Mapping[str, Any] | None = None,
        ignore_unknown: bool = False,
    ) -> str:
        """Render a named section of the template currently being rendered.

        Args:
            section_name: Section to render
            variables: Variables overlaid on a clone of the current context
                (ignored when called from a layout, which shares its context)
            ignore_unknown: Return ``""`` for a missing template or section
                instead of invoking the error handler

        Returns:
            Rendered section, raw passthrough source, ``""`` or error handler output
        """
        session = self.session
        if session.current_kind() is TemplateKind.LAYOUT:
            next_kind = TemplateKind.TEMPLATE
            context = session.current_context()
        else:
            next_kind = session.current_kind()
            context = session.current_context().with_variables(variables)

        obtained = attempt(session.current_template)
        if not isinstance(obtained, Resolved):
            return self._settle(
                obtained, context, IGNORABLE_TEMPLATE_ERRORS if ignore_unknown else ()
            )
        template = obtained.value

        found = attempt(
            lambda: self._section(template, section_name),
            catch=(ChildNotFoundError, InvalidSectionError),
        )
        if not isinstance(found, Resolved):
            return self._settle(
                found, context, IGNORABLE_SECTION_ERRORS if ignore_unknown else ()
            )

        with session.rendering(next_kind, template, context):
            return self._evaluate(found.value, context)

    def render_partial(
        self,
        partial_name: str,
        section_name: str | None = None,
        variables: Mapping[str, Any] | None = None,
        ignore_unknown: bool = False,
    ) -> str:
        """Render a partial, or one section of it, in an isolated scope.

        Args:
            partial_name: Partial to render
            section_name: Render only this section of the partial
            variables: Variables overlaid on the partial's cloned context
            ignore_unknown: Return ``""`` for a missing partial or section
                instead of invoking the error handler

        Returns:
            Rendered partial, raw passthrough source, ``""`` or error handler output
        """
        session = self.session
        context = session.current_context().clone()

        obtained = attempt(lambda: self._resolve_partial(partial_name, section_name, context))
        if not isinstance(obtained, Resolved):
            return self._settle(
                obtained, context, IGNORABLE_PARTIAL_ERRORS if ignore_unknown else ()
            )
        partial = obtained.value

        with session.rendering(TemplateKind.PARTIAL, partial, context):
            if section_name is not None:
                return self.render_section(section_name, variables, ignore_unknown)
            context.variables = context.variables.scope_copy(variables)
            return self._evaluate(partial, context)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _bind(template: ParsedTemplate, context: RenderingContext) -> ParsedTemplate:
        template.bind_arguments(context)
        return template

    @staticmethod
    def _layout_name(template: ParsedTemplate, context: RenderingContext) -> str | None:
        try:
            node = template.get_named_child(LAYOUT_NAME)
        except ChildNotFoundError:
            return None
        bind = getattr(node, "bind_arguments", None)
        if bind is None:
            return None
        name = bind(context).get("name")
        return str(name) if name else None

    @staticmethod
    def _section(template: ParsedTemplate, section_name: str) -> Any:
        if not isinstance(section_name, str) or not section_name.strip():
            raise InvalidSectionError(f"Cannot address a section by {section_name!r}")
        return template.get_named_child(section_name)

    def _resolve_partial(
        self, partial_name: str, section_name: str | None, context: RenderingContext
    ) -> ParsedTemplate:
        partial = self._bind(self.resolver.resolve_partial(partial_name), context)
        if section_name is not None and not str(section_name).strip():
            raise InvalidSectionError(
                f"Cannot address a section of partial '{partial_name}' by {section_name!r}"
            )
        return partial

    @staticmethod
    def _evaluate(node: Node, context: RenderingContext) -> str:
        try:
            return to_output(node.evaluate(context))
        except PassthroughSource as signal:
            logger.debug(f"Parsing disabled during evaluation, returning {len(signal.source)} chars")
            return signal.source

    def _settle(
        self,
        outcome: Outcome[Any],
        context: RenderingContext,
        ignorable: tuple[type[Exception], ...] = (),
    ) -> str:
        if isinstance(outcome, Passthrough):
            logger.debug(f"Parsing disabled, returning {len(outcome.source)} chars of source")
            return outcome.source
        if isinstance(outcome, Failed):
            if isinstance(outcome.error, ignorable):
                logger.debug(f"Ignoring unknown: {outcome.error}")
                return ""
            return self._report(outcome.error, context)
        raise TypeError(f"Resolved outcomes are rendered, not settled: {outcome!r}")

    def _report(self, error: Exception, context: RenderingContext) -> str:
        if isinstance(error, ViewError) and not error.render_stack:
            error.render_stack = self.session.trace()
        return to_output(context.error_handler.handle_view_error(error))
