"""File-based templates -- the most common real-world pattern.

Loads templates, layouts and partials from disk with FileSystemLoader and
turns them into component trees with a small tag builder:

    {{ layout Default }}            declare the layout
    {{ section main }}...{{ end }}  define a section
    {{ render main }}               render a section
    {{ partial Nav }}               render a partial
    {{ user.name }}                 output a variable

Credits.html starts with ``{parsing off}`` and is emitted verbatim.

Run:
    python app.py
"""

import re
from pathlib import Path

from strata import (
    ChoiceLoader,
    DictLoader,
    FileSystemLoader,
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

TAG = re.compile(r"\{\{\s*(.*?)\s*\}\}")


def build(source: str, identifier: str) -> ParsedTemplate:
    """Build a component tree from tag-annotated HTML."""
    stack: list[tuple[str | None, list]] = [(None, [])]
    position = 0
    for match in TAG.finditer(source):
        if match.start() > position:
            stack[-1][1].append(Text(source[position : match.start()]))
        position = match.end()
        word, *args = match.group(1).split()
        if word == "section":
            stack.append((args[0], []))
        elif word == "end":
            name, body = stack.pop()
            stack[-1][1].append(Section(name, tuple(body)))
        elif word == "layout":
            stack[-1][1].append(LayoutName(args[0]))
        elif word == "render":
            stack[-1][1].append(RenderSection(args[0]))
        elif word == "partial":
            stack[-1][1].append(RenderPartial(*args[:2]))
        else:
            stack[-1][1].append(Variable(word))
    if position < len(source):
        stack[-1][1].append(Text(source[position:]))
    return ParsedTemplate(identifier, tuple(stack[0][1]))


root = Path(__file__).parent
paths = TemplatePaths(
    templates=FileSystemLoader(root / "templates"),
    layouts=FileSystemLoader(root / "layouts"),
    # In-memory overrides win over files on disk
    partials=ChoiceLoader([DictLoader({}), FileSystemLoader(root / "partials")]),
)
view = TemplateView(
    RenderingContext(
        {"site_name": "My Site"},
        template_paths=paths,
        parser=TemplateParser(build),
        controller_name="Pages",
        controller_action="Home",
    )
)

home_output = view.assign_multiple(
    {"title": "Welcome", "message": "This is a strata-powered site with layouts."}
).render("home")

about_output = view.assign_multiple(
    {"title": "About Us", "description": "Sections and partials, rendered from files."}
).render("about")


def main() -> None:
    print("=== Home Page ===")
    print(home_output)
    print()
    print("=== About Page ===")
    print(about_output)


if __name__ == "__main__":
    main()
