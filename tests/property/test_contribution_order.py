"""Property tests for contribution accumulation.

For any sequence of fragments, accumulators keep insertion order, merging
concatenates, merging with an empty contribution changes nothing and a
contribution never becomes empty again once something was added.
"""

from __future__ import annotations

from hypothesis import given, strategies as st

from codegen_hooks.contributions import (
    RUST,
    Action,
    RustFunctionContribution,
    RustTypeContribution,
)
from codegen_hooks.core.models import NodeKind
from codegen_hooks.core.results import AnnotationResult

fragment = st.text(min_size=1, max_size=20)
fragments = st.lists(fragment, max_size=10)


@st.composite
def function_contribution_strategy(draw: st.DrawFn) -> RustFunctionContribution:
    """Generate a function contribution with random fragments."""
    contrib = RustFunctionContribution()
    for attr in draw(fragments):
        contrib.add_attribute(attr)
    for line in draw(fragments):
        contrib.add_body_prefix(line)
    for line in draw(fragments):
        contrib.add_body_suffix(line)
    if draw(st.booleans()):
        contrib.skip_default()
    return contrib


class TestInsertionOrder:
    @given(derives=fragments)
    def test_derives_kept_in_order(self, derives: list[str]) -> None:
        contrib = RustTypeContribution()
        for derive in derives:
            contrib.add_derive(derive)
        assert contrib.derives == derives

    @given(derives=st.lists(fragment, min_size=1, max_size=10))
    def test_non_empty_is_monotonic(self, derives: list[str]) -> None:
        contrib = RustTypeContribution()
        for derive in derives:
            contrib.add_derive(derive)
            assert not contrib.is_empty()


class TestMerge:
    @given(first=function_contribution_strategy(), second=function_contribution_strategy())
    def test_merge_concatenates(
        self, first: RustFunctionContribution, second: RustFunctionContribution
    ) -> None:
        merged = first.merge(second)

        assert merged.attributes == first.attributes + second.attributes
        assert merged.body_prefix == first.body_prefix + second.body_prefix
        assert merged.body_suffix == first.body_suffix + second.body_suffix

    @given(contrib=function_contribution_strategy())
    def test_empty_is_identity(self, contrib: RustFunctionContribution) -> None:
        assert RustFunctionContribution().merge(contrib) == contrib
        assert contrib.merge(RustFunctionContribution()) == contrib

    @given(contribs=st.lists(function_contribution_strategy(), min_size=1, max_size=5))
    def test_result_aggregation_follows_invocation_order(
        self, contribs: list[RustFunctionContribution]
    ) -> None:
        result = AnnotationResult(family=RUST, node_kind=NodeKind.FUNCTION, node_name="f")
        for contrib in contribs:
            result.merge_function(contrib)

        expected_prefix = [line for contrib in contribs for line in contrib.body_prefix]
        assert result.function_contrib.body_prefix == expected_prefix

        skip_requested = any(contrib.action == Action.SKIP for contrib in contribs)
        assert (result.action == Action.SKIP) == skip_requested
