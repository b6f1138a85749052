"""Hello World -- the simplest strata example.

One template declares a layout and a section; the layout renders the
section. Trees are built in Python, so no templates directory is needed.

Run:
    python app.py
"""

from strata import (
    DictLoader,
    LayoutName,
    ParsedTemplate,
    RenderingContext,
    RenderSection,
    Section,
    TemplateParser,
    TemplatePaths,
    TemplateView,
    Text,
    Variable,
)

trees = {
    "hello": ParsedTemplate(
        "hello",
        (
            LayoutName("Default"),
            Section("main", (Text("Hello, "), Variable("name"), Text("!"))),
        ),
    ),
    "layout": ParsedTemplate("layout", (Text("<p>"), RenderSection("main"), Text("</p>"))),
}

paths = TemplatePaths(
    templates=DictLoader({"Greeting/Index.html": "hello"}),
    layouts=DictLoader({"Default.html": "layout"}),
)
context = RenderingContext(
    template_paths=paths,
    parser=TemplateParser(lambda source, identifier: trees[source]),
    controller_name="Greeting",
    controller_action="Index",
)
view = TemplateView(context)

output = view.assign("name", "World").render()


def main() -> None:
    print(output)
    print()

    # Re-render a single section with its own variables
    for name in ["Strata", "Layouts", "Python"]:
        print(view.render_section("main", {"name": name}))


if __name__ == "__main__":
    main()
