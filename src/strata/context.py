"""RenderingContext — the scope a template is evaluated against.

A context bundles the variables visible to evaluation with the collaborators
evaluation needs (paths, parser, error handler, the owning view) and the
controller/action that select the top-level template.

Scoping:
    - ``clone()`` copies the context and gives it an independent variable
      provider; collaborators are shared
    - ``with_variables()`` returns a clone whose provider is
      ``scope_copy(overlay)`` of this one

Neither operation touches the source context, so nested sections and
partials can bind variables freely without leaking into their caller.

"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from strata.error_handler import ErrorHandler, TolerantErrorHandler
from strata.parser import TemplateParser
from strata.paths import TemplatePaths
from strata.variables import StandardVariableProvider, VariableProvider

if TYPE_CHECKING:
    from strata.view import TemplateView


class RenderingContext:
    """Variables plus collaborators for one level of rendering.

    Attributes:
        variables: Variable provider read and written by the node tree
        template_paths: Name → source resolution
        parser: Source → component tree
        error_handler: Renders recoverable errors to output
        controller_name: Controller part of the template name
        controller_action: Action part of the template name
        view: View the context is attached to (set by the view)

    Example:
            >>> ctx = RenderingContext(
            ...     variables={"title": "Hello"},
            ...     template_paths=TemplatePaths(templates=DictLoader({...})),
            ...     controller_name="Blog",
            ...     controller_action="Show",
            ... )

    """

    __slots__ = (
        "controller_action",
        "controller_name",
        "error_handler",
        "parser",
        "template_paths",
        "variables",
        "view",
    )

    def __init__(
        self,
        variables: VariableProvider | Mapping[str, Any] | None = None,
        *,
        template_paths: TemplatePaths | None = None,
        parser: TemplateParser | None = None,
        error_handler: ErrorHandler | None = None,
        controller_name: str = "Default",
        controller_action: str = "Default",
    ):
        if variables is None or isinstance(variables, Mapping):
            variables = StandardVariableProvider(variables)
        self.variables: VariableProvider = variables
        self.template_paths = template_paths if template_paths is not None else TemplatePaths()
        self.parser = parser if parser is not None else TemplateParser()
        self.error_handler: ErrorHandler = (
            error_handler if error_handler is not None else TolerantErrorHandler()
        )
        self.controller_name = controller_name
        self.controller_action = controller_action
        self.view: TemplateView | None = None

    def clone(self) -> RenderingContext:
        """Copy with an independent variable provider and shared collaborators.

        Subclasses keep their type and any extra attributes.
        """
        cloned = copy.copy(self)
        cloned.variables = self.variables.clone()
        return cloned

    def with_variables(self, overlay: Mapping[str, Any] | None = None) -> RenderingContext:
        """Clone whose variables are this context's plus ``overlay``."""
        scoped = self.clone()
        scoped.variables = self.variables.scope_copy(overlay)
        return scoped

    def require_view(self) -> TemplateView:
        """The attached view.

        Raises:
            RuntimeError: If the context was never attached to a view
        """
        if self.view is None:
            raise RuntimeError("Rendering context is not attached to a view")
        return self.view

    def __repr__(self) -> str:
        return (
            f"RenderingContext(controller={self.controller_name!r}, "
            f"action={self.controller_action!r}, variables={self.variables!r})"
        )
