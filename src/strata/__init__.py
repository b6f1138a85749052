"""Strata — nested template rendering with layouts, sections and partials.

Strata resolves a named template, wraps it in the layout it declares, and
renders the sections and partials it addresses, keeping variable scopes
apart and a rendering stack in step with the nesting.

Quickstart:
    >>> from strata import (
    ...     DictLoader, LayoutName, ParsedTemplate, RenderSection, RenderingContext,
    ...     Section, TemplateParser, TemplatePaths, TemplateView, Text, Variable,
    ... )
    >>> trees = {
    ...     "page": ParsedTemplate("page", (
    ...         LayoutName("Default"),
    ...         Section("main", (Text("Hello, "), Variable("name"))),
    ...     )),
    ...     "layout": ParsedTemplate("layout", (
    ...         Text("<body>"), RenderSection("main"), Text("</body>"),
    ...     )),
    ... }
    >>> paths = TemplatePaths(
    ...     templates=DictLoader({"Default/Index.html": "page"}),
    ...     layouts=DictLoader({"Default.html": "layout"}),
    ... )
    >>> parser = TemplateParser(lambda source, identifier: trees[source])
    >>> view = TemplateView(RenderingContext(
    ...     template_paths=paths, parser=parser, controller_action="Index",
    ... ))
    >>> view.assign("name", "World").render()
    '<body>Hello, World</body>'

Architecture:
    TemplateView → TemplateResolver → TemplatePaths (loaders) → TemplateParser
         │
         └── RenderSession (stack of RenderingFrame: kind, template, context)

Collaborators:
Strata does not parse template syntax. Source text becomes a component tree
through the builder given to TemplateParser; the bundled ``strata.nodes``
tree is the evaluation engine the view drives.

"""

from strata.context import RenderingContext
from strata.error_handler import ErrorHandler, QuietErrorHandler, TolerantErrorHandler
from strata.exceptions import (
    ChildNotFoundError,
    ErrorCode,
    InvalidSectionError,
    PassthroughSource,
    StackUnderflowError,
    TemplateNotFoundError,
    ViewError,
)
from strata.loaders import ChoiceLoader, DictLoader, FileSystemLoader, FunctionLoader
from strata.nodes import (
    Assign,
    LayoutName,
    Node,
    ParsedTemplate,
    RenderPartial,
    RenderSection,
    Section,
    Text,
    Variable,
)
from strata.outcome import Failed, Passthrough, Resolved
from strata.parser import TemplateParser, static_builder
from strata.paths import TemplatePaths
from strata.resolver import ResolutionKey, TemplateResolver
from strata.session import RenderingFrame, RenderSession, TemplateKind
from strata.variables import StandardVariableProvider, VariableProvider
from strata.view import TemplateView

__version__ = "0.1.0"

__all__ = [
    "Assign",
    "ChildNotFoundError",
    "ChoiceLoader",
    "DictLoader",
    "ErrorCode",
    "ErrorHandler",
    "Failed",
    "FileSystemLoader",
    "FunctionLoader",
    "InvalidSectionError",
    "LayoutName",
    "Node",
    "ParsedTemplate",
    "Passthrough",
    "PassthroughSource",
    "QuietErrorHandler",
    "RenderPartial",
    "RenderSection",
    "RenderSession",
    "RenderingContext",
    "RenderingFrame",
    "ResolutionKey",
    "Resolved",
    "Section",
    "StackUnderflowError",
    "StandardVariableProvider",
    "TemplateKind",
    "TemplateNotFoundError",
    "TemplateParser",
    "TemplatePaths",
    "TemplateResolver",
    "TemplateView",
    "Text",
    "Variable",
    "VariableProvider",
    "ViewError",
    "__version__",
    "static_builder",
]
