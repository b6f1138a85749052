"""Shared hypothesis strategies for Strata property-based testing.

Provides reusable strategies for the two inputs views care about:

- **Variables**: identifier-keyed mappings of plain values
- **Render plans**: nested section/partial call sequences

Individual test modules compose these into property-specific strategies.
"""

from __future__ import annotations

from hypothesis import strategies as st

# ---------------------------------------------------------------------------
# Variable strategies
# ---------------------------------------------------------------------------

identifier = st.from_regex(r"[a-z_][a-z0-9_]{0,12}", fullmatch=True)

scalar_value = st.one_of(
    st.integers(min_value=-1000, max_value=1000),
    st.text(alphabet=st.characters(blacklist_categories=("Cs",)), max_size=20),
    st.booleans(),
)

variable_mapping = st.dictionaries(identifier, scalar_value, max_size=8)

# ---------------------------------------------------------------------------
# Render plan strategies
# ---------------------------------------------------------------------------

# Names for sections that exist in the fixture template, plus one that does not.
section_name = st.sampled_from(["alpha", "beta", "gamma", "missing"])

# One step of a plan: ("section", name) or ("partial", name-or-None)
render_step = st.one_of(
    st.tuples(st.just("section"), section_name),
    st.tuples(st.just("partial"), st.one_of(st.none(), section_name)),
)

render_plan = st.lists(render_step, min_size=0, max_size=12)
