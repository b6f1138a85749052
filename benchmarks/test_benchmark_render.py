"""View rendering benchmarks.

Scenarios:
- "resolve": cached vs. cold name resolution
- "render": full layout render with N partial rows
- "section": a single section rendered from outside any layout

Run with: pytest benchmarks/test_benchmark_render.py --benchmark-only
Compare: pytest benchmarks/test_benchmark_render.py --benchmark-compare
"""

from __future__ import annotations

from collections.abc import Callable

import pytest
from pytest_benchmark.fixture import BenchmarkFixture

from strata import TemplateView


@pytest.mark.benchmark(group="resolve")
def test_resolve_cached(
    benchmark: BenchmarkFixture, view_factory: Callable[..., TemplateView]
) -> None:
    resolver = view_factory().resolver
    resolver.resolve_template("Bench", "Index")
    benchmark(resolver.resolve_template, "Bench", "Index")


@pytest.mark.benchmark(group="resolve")
def test_resolve_cold(
    benchmark: BenchmarkFixture, view_factory: Callable[..., TemplateView]
) -> None:
    resolver = view_factory().resolver

    def resolve() -> None:
        resolver.clear()
        resolver.resolve_template("Bench", "Index")

    benchmark(resolve)


@pytest.mark.benchmark(group="render")
@pytest.mark.parametrize("item_count", [10, 100, 1000])
def test_render_layout_with_partials(
    benchmark: BenchmarkFixture,
    view_factory: Callable[..., TemplateView],
    item_count: int,
) -> None:
    view = view_factory(item_count)
    output = benchmark(view.render)
    assert output.count("<tr>") == item_count
    assert view.session.depth == 0


@pytest.mark.benchmark(group="section")
def test_render_section_with_overlay(
    benchmark: BenchmarkFixture, view_factory: Callable[..., TemplateView]
) -> None:
    view = view_factory(10)
    output = benchmark(view.render_section, "title", {"title": "Overlay"})
    assert output == "Overlay"
