"""Tests for TemplatePaths and the bundled loaders."""

from __future__ import annotations

from pathlib import Path

import pytest

from strata import (
    ChoiceLoader,
    DictLoader,
    FileSystemLoader,
    FunctionLoader,
    TemplateNotFoundError,
    TemplatePaths,
)


class TestIdentifiers:
    def test_template_identifier(self) -> None:
        assert TemplatePaths().template_identifier("Blog", "Show") == "template:Blog/Show.html"

    def test_template_identifier_without_controller(self) -> None:
        assert TemplatePaths().template_identifier("", "Show") == "template:Show.html"

    def test_layout_and_partial_identifiers(self) -> None:
        paths = TemplatePaths()
        assert paths.layout_identifier("Default") == "layout:Default.html"
        assert paths.partial_identifier("Cards/Card") == "partial:Cards/Card.html"

    def test_extension_not_doubled(self) -> None:
        assert TemplatePaths().layout_identifier("Default.html") == "layout:Default.html"

    def test_custom_format(self) -> None:
        paths = TemplatePaths(format="txt")
        assert paths.partial_identifier("Card") == "partial:Card.txt"


class TestSources:
    def test_template_source(self) -> None:
        paths = TemplatePaths(templates=DictLoader({"Blog/Show.html": "show"}))
        assert paths.template_source("Blog", "Show") == "show"

    def test_template_falls_back_to_bare_action(self) -> None:
        paths = TemplatePaths(templates=DictLoader({"Show.html": "shared show"}))
        assert paths.template_source("Blog", "Show") == "shared show"

    def test_missing_template_names_candidates(self) -> None:
        paths = TemplatePaths(templates=DictLoader({}))
        with pytest.raises(TemplateNotFoundError) as excinfo:
            paths.template_source("Blog", "Show")
        assert "'Blog/Show.html'" in str(excinfo.value)
        assert "'Show.html'" in str(excinfo.value)
        assert excinfo.value.name == "Blog/Show"

    def test_missing_loader(self) -> None:
        with pytest.raises(TemplateNotFoundError, match="No partial loader"):
            TemplatePaths().partial_source("Card")

    def test_missing_layout_names_kind(self) -> None:
        paths = TemplatePaths(layouts=DictLoader({"Default.html": ""}))
        with pytest.raises(TemplateNotFoundError, match="Layout 'Wide' not found") as excinfo:
            paths.layout_source("Wide")
        assert excinfo.value.name == "Wide"


class TestLoaders:
    def test_dict_loader_suggests_close_match(self) -> None:
        loader = DictLoader({"Default.html": ""})
        with pytest.raises(TemplateNotFoundError, match="Did you mean 'Default.html'"):
            loader.get_source("Defualt.html")

    def test_dict_loader_list_templates(self) -> None:
        loader = DictLoader({"b.html": "", "a.html": "", "c.txt": ""})
        assert loader.list_templates(".html") == ["a.html", "b.html"]

    def test_filesystem_loader(self, tmp_path: Path) -> None:
        (tmp_path / "Blog").mkdir()
        (tmp_path / "Blog" / "Show.html").write_text("from disk")
        loader = FileSystemLoader(tmp_path)
        source, filename = loader.get_source("Blog/Show.html")
        assert source == "from disk"
        assert filename == str(tmp_path / "Blog" / "Show.html")
        assert loader.list_templates() == ["Blog/Show.html"]

    def test_filesystem_loader_search_order(self, tmp_path: Path) -> None:
        first, second = tmp_path / "first", tmp_path / "second"
        first.mkdir()
        second.mkdir()
        (second / "Card.html").write_text("second")
        assert FileSystemLoader([first, second]).get_source("Card.html")[0] == "second"
        (first / "Card.html").write_text("first")
        assert FileSystemLoader([first, second]).get_source("Card.html")[0] == "first"

    def test_filesystem_loader_missing(self, tmp_path: Path) -> None:
        with pytest.raises(TemplateNotFoundError):
            FileSystemLoader(tmp_path).get_source("nope.html")

    def test_choice_loader(self) -> None:
        loader = ChoiceLoader([DictLoader({"a.html": "custom"}), DictLoader({"a.html": "x", "b.html": "default"})])
        assert loader.get_source("a.html")[0] == "custom"
        assert loader.get_source("b.html")[0] == "default"
        with pytest.raises(TemplateNotFoundError, match="any of 2 loaders"):
            loader.get_source("c.html")

    def test_function_loader(self) -> None:
        loader = FunctionLoader(lambda name: "hit" if name == "a.html" else None)
        assert loader.get_source("a.html") == ("hit", "<function>")
        with pytest.raises(TemplateNotFoundError):
            loader.get_source("b.html")

    def test_paths_over_filesystem(self, tmp_path: Path) -> None:
        (tmp_path / "Default.html").write_text("<main/>")
        paths = TemplatePaths(layouts=FileSystemLoader(tmp_path))
        assert paths.layout_source("Default") == "<main/>"
