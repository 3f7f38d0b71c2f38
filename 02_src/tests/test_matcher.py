"""Tests for the name matcher."""

from invitebot.matching import find_entry, match, split_fragments
from invitebot.models import DirectoryEntry


class TestSplitFragments:
    """Tests for split_fragments()."""

    def test_splits_and_trims(self):
        assert split_fragments(" chris , connor ") == ["chris", "connor"]

    def test_keeps_empty_fragments(self):
        assert split_fragments("chris,,connor") == ["chris", "", "connor"]

    def test_single_name(self):
        assert split_fragments("chris") == ["chris"]


class TestMatch:
    """Tests for match()."""

    def test_all_fragments_match(self, directory_entries):
        """Example: "chris,connor" resolves both users in input order."""
        result = match(split_fragments("chris,connor"), directory_entries)

        assert result.matched == [("U1", "Chris Lee"), ("U2", "Connor Brown")]
        assert result.unmatched == []
        assert result.is_complete

    def test_order_follows_input(self, directory_entries):
        result = match(["connor", "chris"], directory_entries)
        assert result.ids == ["U2", "U1"]
        assert result.names == ["Connor Brown", "Chris Lee"]

    def test_unmatched_fragment_reported(self, directory_entries):
        """Example: "chris,dave" leaves dave unmatched."""
        result = match(split_fragments("chris,dave"), directory_entries)

        assert result.matched == [("U1", "Chris Lee")]
        assert result.unmatched == ["dave"]
        assert not result.is_complete
        assert result.all_display_names == ["Chris Lee", "Connor Brown"]

    def test_case_insensitive(self, directory_entries):
        result = match(["CHRIS", "bRoWn"], directory_entries)
        assert result.ids == ["U1", "U2"]

    def test_matches_handle(self, directory_entries):
        result = match(["connor_b"], directory_entries)
        assert result.ids == ["U2"]

    def test_matches_display_name_substring(self, directory_entries):
        result = match(["lee"], directory_entries)
        assert result.ids == ["U1"]

    def test_first_match_wins(self, directory_entries):
        """"c" is contained in both entries; the first one in order wins."""
        result = match(["c"], directory_entries)
        assert result.ids == ["U1"]

        result = match(["c"], list(reversed(directory_entries)))
        assert result.ids == ["U2"]

    def test_empty_fragment_matches_first_entry(self, directory_entries):
        result = match([""], directory_entries)
        assert result.ids == ["U1"]
        assert result.unmatched == []

    def test_duplicates_not_deduplicated(self, directory_entries):
        result = match(["chris", "Chris Lee"], directory_entries)
        assert result.ids == ["U1", "U1"]

    def test_fragments_trimmed(self, directory_entries):
        result = match(["  dave  "], directory_entries)
        assert result.unmatched == ["dave"]

    def test_empty_directory(self):
        result = match(["chris"], [])
        assert result.matched == []
        assert result.unmatched == ["chris"]
        assert result.all_display_names == []

    def test_directory_not_mutated(self, directory_entries):
        snapshot = list(directory_entries)
        match(["chris", "dave"], directory_entries)
        assert directory_entries == snapshot


class TestFindEntry:
    """Tests for find_entry()."""

    def test_returns_entry(self, directory_entries):
        entry = find_entry("connor", directory_entries)
        assert entry == DirectoryEntry(id="U2", handle="connor_b", display_name="Connor Brown")

    def test_returns_none(self, directory_entries):
        assert find_entry("zed", directory_entries) is None
