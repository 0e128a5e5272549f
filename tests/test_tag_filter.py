"""Tests for TagFilter"""
from gitopolis.models.tag_filter import TagFilter


class TestTagFilterMatching:
    """Test AND-of-ORs semantics."""

    def test_empty_filter_matches_everything(self):
        """Test an empty filter matches every repo."""
        assert TagFilter.all().matches([])
        assert TagFilter().matches(["a"])

    def test_or_within_group(self):
        """Test tags within a group are ORed."""
        tag_filter = TagFilter.from_groups([["a", "c"]])
        assert tag_filter.matches({"a", "b"})
        assert not tag_filter.matches({"b"})

    def test_and_across_groups(self):
        """Test groups are ANDed."""
        tag_filter = TagFilter.from_groups([["a", "c"], ["d"]])
        assert not tag_filter.matches({"a", "b"})
        assert tag_filter.matches({"a", "b", "d"})
        assert tag_filter.matches({"c", "d"})

    def test_empty_groups_dropped(self):
        """Test empty groups are dropped."""
        assert TagFilter.from_groups([[], ["a"]]).groups == (frozenset({"a"}),)


class TestTagFilterFromArgs:
    """Test building filters from command-line values."""

    def test_each_value_is_a_group(self):
        """Test each argument value becomes a group."""
        tag_filter = TagFilter.from_args(["a", "b"])
        assert tag_filter.groups == (frozenset({"a"}), frozenset({"b"}))

    def test_commas_make_or_group(self):
        """Test comma-separated values form an OR group."""
        tag_filter = TagFilter.from_args(["a, c", "d"])
        assert tag_filter.groups == (frozenset({"a", "c"}), frozenset({"d"}))

    def test_none_is_empty(self):
        """Test no arguments give an empty filter."""
        assert TagFilter.from_args(None).is_empty
        assert TagFilter.from_args([",", ""]).is_empty

    def test_str(self):
        """Test the readable form of a filter."""
        assert str(TagFilter()) == "(all)"
        assert str(TagFilter.from_args(["c,a", "d"])) == "(a OR c) AND d"
