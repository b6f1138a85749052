from __future__ import annotations

from collections.abc import Callable

import pytest

from strata import (
    DictLoader,
    LayoutName,
    ParsedTemplate,
    RenderingContext,
    RenderPartial,
    RenderSection,
    Section,
    TemplateParser,
    TemplatePaths,
    TemplateView,
    Text,
    Variable,
)

ITEM_COUNT = 100


def _trees(item_count: int) -> dict[str, ParsedTemplate]:
    rows = tuple(
        RenderPartial("Row", arguments={"item": Variable(f"items.{i}")}) for i in range(item_count)
    )
    return {
        "page": ParsedTemplate(
            "page",
            (
                LayoutName("Default"),
                Section("main", (Text("<table>"), *rows, Text("</table>"))),
                Section("title", (Variable("title"),)),
            ),
        ),
        "layout": ParsedTemplate(
            "layout",
            (
                Text("<title>"),
                RenderSection("title"),
                Text("</title><body>"),
                RenderSection("main"),
                Text("</body>"),
            ),
        ),
        "row": ParsedTemplate(
            "row",
            (Text("<tr><td>"), Variable("item.name"), Text("</td></tr>")),
        ),
    }


@pytest.fixture
def view_factory() -> Callable[[int], TemplateView]:
    """Build a view rendering ``item_count`` partial rows inside a layout."""

    def factory(item_count: int = ITEM_COUNT) -> TemplateView:
        trees = _trees(item_count)
        paths = TemplatePaths(
            templates=DictLoader({"Bench/Index.html": "page"}),
            layouts=DictLoader({"Default.html": "layout"}),
            partials=DictLoader({"Row.html": "row"}),
        )
        context = RenderingContext(
            {"title": "Benchmark", "items": [{"name": f"item {i}"} for i in range(item_count)]},
            template_paths=paths,
            parser=TemplateParser(lambda source, identifier: trees[source]),
            controller_name="Bench",
            controller_action="Index",
        )
        return TemplateView(context)

    return factory
