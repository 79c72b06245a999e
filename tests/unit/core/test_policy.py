"""Unit tests for the extension policy filter."""

import pytest
from tidyctl.config import FilterPolicy
from tidyctl.core.policy import (
    PolicyVerdict,
    explain,
    filter_candidates,
    is_eligible,
)


@pytest.fixture
def policy() -> FilterPolicy:
    """Default policy."""
    return FilterPolicy()


class TestFilterCandidates:
    """Tests for filter_candidates."""

    def test_default_policy_selection(self, policy: FilterPolicy) -> None:
        """Only included, non-excluded files survive."""
        result = filter_candidates({"a.cs", "b.txt", "c.xaml", "d.designer.cs"}, policy)

        assert set(result) == {"a.cs", "c.xaml"}

    def test_result_is_sorted(self, policy: FilterPolicy) -> None:
        """Output order is deterministic."""
        result = filter_candidates(["z.cs", "a.config", "m.xml"], policy)

        assert result == ["a.config", "m.xml", "z.cs"]

    def test_duplicates_collapse(self, policy: FilterPolicy) -> None:
        """Repeated inputs appear once."""
        assert filter_candidates(["a.cs", "a.cs"], policy) == ["a.cs"]

    def test_empty_input(self, policy: FilterPolicy) -> None:
        """No candidates yields no output."""
        assert filter_candidates([], policy) == []

    def test_empty_include_list_rejects_everything(self) -> None:
        """Without include suffixes nothing is eligible."""
        policy = FilterPolicy(include_suffixes=[], exclude_suffixes=[])

        assert filter_candidates(["a.cs", "b.xml"], policy) == []


class TestExplain:
    """Tests for explain and is_eligible."""

    def test_exclude_wins_over_include(self, policy: FilterPolicy) -> None:
        """Foo.designer.cs is rejected although it ends with .cs."""
        decision = explain("/repo/Foo.designer.cs", policy)

        assert decision.verdict == PolicyVerdict.EXCLUDED
        assert decision.suffix == ".designer.cs"
        assert decision.accepted is False

    def test_match_is_case_insensitive(self, policy: FilterPolicy) -> None:
        """Upper-case extensions still match."""
        assert is_eligible("/repo/App.XAML", policy) is True
        assert is_eligible("/repo/Form1.DESIGNER.CS", policy) is False

    def test_included_reports_suffix(self, policy: FilterPolicy) -> None:
        """Accepted paths report the include suffix that matched."""
        decision = explain("web.config", policy)

        assert decision.verdict == PolicyVerdict.INCLUDED
        assert decision.suffix == ".config"

    def test_not_included(self, policy: FilterPolicy) -> None:
        """Paths matching no rule are rejected without a suffix."""
        decision = explain("readme.md", policy)

        assert decision.verdict == PolicyVerdict.NOT_INCLUDED
        assert decision.suffix is None

    def test_suffix_must_match_end(self, policy: FilterPolicy) -> None:
        """A suffix in the middle of the name does not count."""
        assert is_eligible("archive.cs.bak", policy) is False

    def test_custom_exclude(self) -> None:
        """User exclusions override user inclusions."""
        policy = FilterPolicy(include_suffixes=[".py"], exclude_suffixes=["_pb2.py"])

        assert is_eligible("model.py", policy) is True
        assert is_eligible("model_pb2.py", policy) is False
