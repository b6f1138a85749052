"""Pytest configuration and fixtures for Strata tests."""

from __future__ import annotations

from typing import Any

import pytest

from strata import ParsedTemplate, RenderingContext, TemplateParser, TemplatePaths, TemplateView

from .helpers import RecordingErrorHandler, TreeRegistry


@pytest.fixture
def registry() -> TreeRegistry:
    return TreeRegistry()


@pytest.fixture
def error_handler() -> RecordingErrorHandler:
    return RecordingErrorHandler()


@pytest.fixture
def make_view(registry: TreeRegistry, error_handler: RecordingErrorHandler):
    """Factory building a TemplateView over in-memory trees.

    Keys are file names as TemplatePaths looks them up
    (``Blog/Show.html``, ``Default.html``, ``Card.html``).
    """

    def factory(
        templates: dict[str, ParsedTemplate | str] | None = None,
        layouts: dict[str, ParsedTemplate | str] | None = None,
        partials: dict[str, ParsedTemplate | str] | None = None,
        *,
        controller: str = "Blog",
        action: str = "Show",
        variables: dict[str, Any] | None = None,
    ) -> TemplateView:
        paths = TemplatePaths(
            templates=registry.loader("template", templates or {}),
            layouts=registry.loader("layout", layouts or {}),
            partials=registry.loader("partial", partials or {}),
        )
        context = RenderingContext(
            variables,
            template_paths=paths,
            parser=TemplateParser(registry.build),
            error_handler=error_handler,
            controller_name=controller,
            controller_action=action,
        )
        return TemplateView(context)

    return factory
