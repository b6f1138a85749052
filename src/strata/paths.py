"""Name → source resolution for templates, layouts and partials.

TemplatePaths maps logical names to loader file names and to cache
identifiers:

    ```
    template  (controller, action)  →  <Controller>/<Action>.<format>
                                       fallback: <Action>.<format>
    layout    name                  →  <Name>.<format>
    partial   name                  →  <Name>.<format>
    ```

Identifiers are stable strings (``template:Blog/Show.html``) used for the
parsed template's identity and in error messages. Sources are returned as
text; a missing loader or file raises TemplateNotFoundError.

"""

from __future__ import annotations

import logging

from strata.exceptions import TemplateNotFoundError
from strata.loaders import Loader

logger = logging.getLogger(__name__)


class TemplatePaths:
    """Locate template, layout and partial sources by logical name.

    Attributes:
        templates: Loader for controller/action templates
        layouts: Loader for layouts
        partials: Loader for partials
        format: File extension without the dot (default ``"html"``)

    Example:
            >>> paths = TemplatePaths(
            ...     templates=DictLoader({"Blog/Show.html": "..."}),
            ...     layouts=DictLoader({"Default.html": "..."}),
            ... )
            >>> paths.template_identifier("Blog", "Show")
            'template:Blog/Show.html'
            >>> paths.layout_identifier("Default")
            'layout:Default.html'

    """

    __slots__ = ("format", "layouts", "partials", "templates")

    def __init__(
        self,
        templates: Loader | None = None,
        layouts: Loader | None = None,
        partials: Loader | None = None,
        format: str = "html",
    ):
        self.templates = templates
        self.layouts = layouts
        self.partials = partials
        self.format = format

    def template_identifier(self, controller: str, action: str) -> str:
        return f"template:{self._template_file(controller, action)}"

    def layout_identifier(self, name: str) -> str:
        return f"layout:{self._file_name(name)}"

    def partial_identifier(self, name: str) -> str:
        return f"partial:{self._file_name(name)}"

    def template_source(self, controller: str, action: str) -> str:
        """Source for a controller action, falling back to the bare action file."""
        if self.templates is None:
            raise TemplateNotFoundError(
                f"No template loader configured for action '{action}'", name=action
            )
        candidates = [self._template_file(controller, action)]
        if controller:
            candidates.append(self._file_name(action))
        for file_name in candidates:
            try:
                source, _ = self.templates.get_source(file_name)
            except TemplateNotFoundError:
                continue
            return source
        raise TemplateNotFoundError(
            f"Template for action '{action}' not found (looked for "
            f"{', '.join(repr(c) for c in candidates)})",
            name=f"{controller}/{action}" if controller else action,
        )

    def layout_source(self, name: str) -> str:
        return self._source("Layout", self.layouts, name)

    def partial_source(self, name: str) -> str:
        return self._source("Partial", self.partials, name)

    def _source(self, kind: str, loader: Loader | None, name: str) -> str:
        if loader is None:
            raise TemplateNotFoundError(f"No {kind.lower()} loader configured for '{name}'", name=name)
        file_name = self._file_name(name)
        try:
            source, filename = loader.get_source(file_name)
        except TemplateNotFoundError as error:
            raise TemplateNotFoundError(
                f"{kind} '{name}' not found (looked for '{file_name}'): {error.message}",
                name=name,
            ) from error
        logger.debug(f"Loaded {kind.lower()} '{name}' from {filename or '<memory>'}")
        return source

    def _template_file(self, controller: str, action: str) -> str:
        if controller:
            return f"{controller}/{self._file_name(action)}"
        return self._file_name(action)

    def _file_name(self, name: str) -> str:
        suffix = f".{self.format}"
        return name if name.endswith(suffix) else f"{name}{suffix}"
