"""Unit tests for entry scoring and ranking."""

import pytest
from page_name_finder.core.indexer import make_entry
from page_name_finder.core.scorer import QueryKeys, rank_entries, score_entry


class TestScoreEntry:
    """Test cases for score_entry."""
    
    @pytest.fixture
    def hill_creek(self):
        """Entry with an A-B number key."""
        return make_entry(1, "HILL CREEK UNIT 10-28F")
    
    def test_exact_number_match(self, hill_creek):
        """Test the dominant exact-number bonus."""
        assert score_entry("10-28", hill_creek) == -1000
    
    def test_leading_zeros_ignored(self, hill_creek):
        """Test that the query's leading zeros do not prevent an exact match."""
        assert score_entry("010-028", hill_creek) == -1000
    
    def test_number_distance(self, hill_creek):
        """Test component-wise distance between A-B keys."""
        assert score_entry("10-29", hill_creek) == 1
        assert score_entry("12-20", hill_creek) == 2 + 8
    
    def test_number_format_mismatch(self, hill_creek):
        """Test the penalty when only one side is an A-B key."""
        assert score_entry("10", hill_creek) == 50
        assert score_entry("10-28", make_entry(1, "UNIT 7")) == 50
    
    def test_oversized_number_scored_as_mismatch(self, hill_creek):
        """Test that an A-B query too long to compare numerically gets the mismatch penalty."""
        assert score_entry("1" * 5000 + "-28", hill_creek) == 50
        assert score_entry("10-28", make_entry(2, "TANK " + "1" * 5000 + "-28")) == 50
    
    def test_missing_entry_number(self):
        """Test the penalty for entries without digits."""
        assert score_entry("10-28", make_entry(1, "TOWNSHIP BATTERY")) == 200
    
    def test_query_without_numbers_or_letters(self, hill_creek):
        """Test that a query with neither digits nor letters scores zero."""
        assert score_entry("-", hill_creek) == 0
        assert score_entry("", hill_creek) == 0
    
    def test_query_contained_in_entry_tokens(self, hill_creek):
        """Test the bonus when the entry name contains the query words."""
        assert score_entry("hill creek", hill_creek) == -300
    
    def test_entry_tokens_contained_in_query(self, hill_creek):
        """Test the smaller bonus when the query contains the entry name."""
        assert score_entry("hill creek unit federal", hill_creek) == -150
    
    def test_common_prefix_penalty(self, hill_creek):
        """Test the prefix heuristic for unrelated names."""
        # "HILLCANYON" shares "HILLC" with "HILLCREEKUNIT"
        assert score_entry("hill canyon", hill_creek) == (20 - 5) + 50
        assert score_entry("zzz", hill_creek) == 20 + 50
    
    def test_prefix_capped(self):
        """Test that the prefix credit is capped at twenty letters."""
        entry = make_entry(1, "ABCDEFGHIJKLMNOPQRSTUVWXYZ")
        assert score_entry("ABCDEFGHIJKLMNOPQRSTUVWXY Q", entry) == 50
    
    def test_number_and_tokens_combined(self, hill_creek):
        """Test that numeric and token terms add up."""
        assert score_entry("Hill Creek 10-28", hill_creek) == -1300
    
    def test_letters_attached_to_number(self, hill_creek):
        """Test a query typed exactly like the name suffix."""
        # "10-28F" gives number key 10-28 and token key "F"
        assert score_entry("10-28F", hill_creek) == -1000 + 20 + 50
    
    def test_exact_number_beats_other_number(self):
        """Test that the exact key scores strictly lower than any other key."""
        exact = make_entry(1, "HILL CREEK UNIT 5-12")
        other = make_entry(1, "HILL CREEK UNIT 5-13")
        missing = make_entry(1, "HILL CREEK UNIT")
        
        for query in ["5-12", "hill creek 5-12", "HILL CREEK UNIT 05-12H"]:
            assert score_entry(query, exact) < score_entry(query, other)
            assert score_entry(query, exact) < score_entry(query, missing)
    
    def test_precomputed_keys(self, hill_creek):
        """Test that precomputed query keys give the same score."""
        keys = QueryKeys("hill 10-28")
        assert score_entry("hill 10-28", hill_creek, keys) == score_entry("hill 10-28", hill_creek)


class TestRankEntries:
    """Test cases for rank_entries."""
    
    @pytest.fixture
    def entries(self):
        """Entries in index order."""
        return [
            make_entry(1, "HILL CREEK UNIT 10-28F"),
            make_entry(2, "HILL CREEK UNIT 10-29F"),
            make_entry(3, "LITTLE CANYON UNIT 05-12H"),
            make_entry(4, "FEDERAL 01-29"),
        ]
    
    def test_best_first(self, entries):
        """Test ascending score order."""
        ranked = rank_entries("10-29", entries)
        
        assert [e.page_number for e, _ in ranked] == [2, 1, 4, 3]
        assert [s for _, s in ranked] == [-1000, 1, 9, 22]
    
    def test_stable_for_ties(self, entries):
        """Test that equal scores keep insertion order."""
        ranked = rank_entries("hill creek", entries)
        
        assert [e.page_number for e, _ in ranked] == [1, 2, 3, 4]
    
    def test_never_filters(self, entries):
        """Test that poor matches are still returned."""
        ranked = rank_entries("zzz 99-99", entries)
        
        assert len(ranked) == len(entries)
    
    def test_limit(self):
        """Test that at most the limit is kept."""
        entries = [make_entry(page, f"UNIT {page}") for page in range(1, 26)]
        
        assert len(rank_entries("UNIT", entries)) == 20
        assert len(rank_entries("UNIT", entries, limit=5)) == 5
    
    def test_empty_index(self):
        """Test ranking an empty index."""
        assert rank_entries("10-28", []) == []
