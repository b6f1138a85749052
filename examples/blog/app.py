"""Partials and sections -- render one post card per item.

The list template renders the ``Card`` partial once per post, passing the
post in as ``post``. Each card gets its own scope, so the ``post`` variable
never shows up in the list template. A missing optional section renders
nothing; a missing required one goes to the error handler.

Run:
    python app.py
"""

from strata import (
    DictLoader,
    ParsedTemplate,
    QuietErrorHandler,
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

posts = [
    {"title": "Layouts", "author": "ada"},
    {"title": "Sections", "author": "grace"},
]

trees = {
    "list": ParsedTemplate(
        "list",
        (
            Text("<ul>"),
            RenderPartial("Card", arguments={"post": Variable("posts.0")}),
            RenderPartial("Card", arguments={"post": Variable("posts.1")}),
            Text("</ul>"),
            RenderSection("pagination", optional=True),
            Text("[post="),
            Variable("post", "unset"),
            Text("]"),
        ),
    ),
    "card": ParsedTemplate(
        "card",
        (
            Text("<li>"),
            Variable("post.title"),
            Text(" by "),
            Variable("post.author"),
            Text("</li>"),
            Section("byline", (Text("by "), Variable("post.author"))),
        ),
    ),
}

paths = TemplatePaths(
    templates=DictLoader({"Blog/List.html": "list"}),
    partials=DictLoader({"Card.html": "card"}),
)
view = TemplateView(
    RenderingContext(
        {"posts": posts},
        template_paths=paths,
        parser=TemplateParser(lambda source, identifier: trees[source]),
        error_handler=QuietErrorHandler(),
        controller_name="Blog",
        controller_action="List",
    )
)

output = view.render()

byline = view.render_partial("Card", "byline", {"post": posts[1]})

missing = view.render_partial("Card", "footer")


def main() -> None:
    print(output)
    print(byline)
    print(repr(missing))


if __name__ == "__main__":
    main()
