"""Unit tests for the per-document search engine."""

import asyncio

import pytest
from page_name_finder.core.engine import DocumentSearchEngine


async def _aiter(items):
    for item in items:
        await asyncio.sleep(0)
        yield item


class TestDocumentSearchEngine:
    """Test cases for the DocumentSearchEngine class."""
    
    @pytest.fixture
    def engine(self):
        """Create a search engine instance for testing."""
        return DocumentSearchEngine()
    
    @pytest.fixture
    def first_document(self):
        """Pages of the first statement document."""
        return [
            "Well Name: HILL CREEK UNIT 10-28F GAS VOLUME STATEMENT November 2025",
            "Well Name: HILL CREEK UNIT 10-29F GAS VOLUME STATEMENT November 2025",
            "Well Name: LITTLE CANYON UNIT 05-12H November 2025",
        ]
    
    @pytest.fixture
    def second_document(self):
        """Pages of another statement document."""
        return [
            "Well Name: FEDERAL 01-29 GAS VOLUME STATEMENT",
            "Well Name: UNIT 2 GAS VOLUME STATEMENT Well Name: UNIT 10 GAS VOLUME STATEMENT",
        ]
    
    def test_engine_initialization(self, engine):
        """Test that a new engine has no document."""
        assert engine.entries == []
        assert engine.generation == 0
        assert engine.document_id is None
        assert engine.search("10-28") is None
    
    def test_rebuild(self, engine, first_document):
        """Test loading page text."""
        result = engine.rebuild(first_document, document_id="nov.pdf")
        
        assert len(result.entries) == 3
        assert engine.entries == result.entries
        assert engine.page_count == 3
        assert engine.document_id == "nov.pdf"
        assert engine.generation == 1
    
    def test_search(self, engine, first_document):
        """Test resolving queries after a load."""
        engine.rebuild(first_document)
        
        assert engine.search("10-29").page_number == 2
        assert engine.search("little canyon").page_number == 3
        assert engine.search("   ") is None
    
    def test_search_cycles(self, engine, first_document):
        """Test that repeating a query walks through the candidates."""
        engine.rebuild(first_document)
        
        pages = [engine.search("hill creek").page_number for _ in range(4)]
        assert pages == [1, 2, 3, 1]
    
    def test_new_document_resets_everything(self, engine, first_document, second_document):
        """Test that a second load replaces entries and resets the session."""
        engine.rebuild(first_document)
        engine.search("hill creek")
        engine.search("hill creek")
        
        engine.rebuild(second_document)
        
        assert [e.name_raw for e in engine.entries] == ["FEDERAL 01-29", "UNIT 2", "UNIT 10"]
        assert engine.session.last_query_signature is None
        assert engine.session.last_matches == []
        assert engine.session.last_match_index == 0
        
        match = engine.search("hill creek")
        assert match.match_index == 0
        assert match.entry.name_raw == "FEDERAL 01-29"
    
    def test_begin_load_clears_immediately(self, engine, first_document):
        """Test that searches during a load see no document."""
        engine.rebuild(first_document)
        engine.begin_load("next.pdf")
        
        assert engine.entries == []
        assert engine.search("10-28") is None
        assert engine.document_id == "next.pdf"
    
    def test_stale_build_discarded(self, engine, first_document, second_document):
        """Test that an older generation cannot overwrite a newer load."""
        old_generation = engine.begin_load("old.pdf")
        new_generation = engine.begin_load("new.pdf")
        
        assert engine.rebuild(second_document, generation=new_generation) is not None
        assert engine.rebuild(first_document, generation=old_generation) is None
        
        assert [e.name_raw for e in engine.entries] == ["FEDERAL 01-29", "UNIT 2", "UNIT 10"]
        assert engine.document_id == "new.pdf"
        assert engine.get_stats()["stale_builds_discarded"] == 1
    
    def test_load_pages_async(self, engine, first_document):
        """Test loading pages supplied asynchronously."""
        result = asyncio.run(engine.load_pages_async(_aiter(first_document), document_id="nov.pdf"))
        
        assert [e.page_number for e in result.entries] == [1, 2, 3]
        assert engine.search("10-28").page_number == 1
    
    def test_load_pages_async_superseded(self, engine, first_document, second_document):
        """Test that a load started mid-build wins over the running build."""
        async def interrupted_pages():
            for page_number, text in enumerate(first_document, start=1):
                if page_number == 2:
                    engine.rebuild(second_document, document_id="second.pdf")
                await asyncio.sleep(0)
                yield text
        
        result = asyncio.run(engine.load_pages_async(interrupted_pages(), document_id="first.pdf"))
        
        assert result is None
        assert engine.document_id == "second.pdf"
        assert [e.name_raw for e in engine.entries] == ["FEDERAL 01-29", "UNIT 2", "UNIT 10"]
    
    def test_loading_flag(self, engine, first_document):
        """Test that loading is reported from begin_load until commit."""
        assert engine.loading is False
        
        generation = engine.begin_load("nov.pdf")
        assert engine.loading is True
        assert engine.get_stats()["index_stats"]["loading"] is True
        
        engine.rebuild(first_document, generation=generation)
        assert engine.loading is False
    
    def test_superseded_build_keeps_loading(self, engine, first_document):
        """Test that a stale commit does not end the newer load."""
        old_generation = engine.begin_load("old.pdf")
        engine.begin_load("new.pdf")
        
        assert engine.rebuild(first_document, generation=old_generation) is None
        assert engine.loading is True
    
    def test_failed_build_ends_loading(self, engine):
        """Test that a failing page source ends the load and propagates the error."""
        def broken_pages():
            yield "Name: HILL CREEK UNIT 10-28F"
            raise RuntimeError("extraction failed")
        
        with pytest.raises(RuntimeError):
            engine.rebuild(broken_pages(), document_id="broken.pdf")
        
        assert engine.loading is False
        assert engine.entries == []
    
    def test_failed_async_build_ends_loading(self, engine):
        """Test that a failing async page source ends the load."""
        async def broken_pages():
            yield "Name: HILL CREEK UNIT 10-28F"
            raise RuntimeError("extraction failed")
        
        with pytest.raises(RuntimeError):
            asyncio.run(engine.load_pages_async(broken_pages(), document_id="broken.pdf"))
        
        assert engine.loading is False
    
    def test_clear_ends_loading(self, engine):
        """Test that clearing leaves no load in flight."""
        engine.begin_load("pending.pdf")
        engine.clear()
        
        assert engine.loading is False
    
    def test_rebuild_with_long_digit_run(self, engine):
        """Test that a name with a very long digit run does not break the build."""
        result = engine.rebuild([
            "Name: HILL CREEK UNIT 10-28F",
            "Name: BARCODE " + "7" * 5000,
        ])
        
        assert len(result.entries) == 2
        assert engine.search("10-28").page_number == 1
        assert engine.search("7" * 5000).page_number == 2
        assert [i.value for i in engine.listing()] == [2, 1]
    
    def test_listing_sorted(self, engine):
        """Test the numeric-aware listing order."""
        result = engine.rebuild([
            "Name: UNIT 10 GAS VOLUME STATEMENT",
            "Name: UNIT 2 GAS VOLUME STATEMENT",
            "Name: alpha battery GAS VOLUME STATEMENT",
        ])
        
        assert [i.label for i in result.listing_events] == [
            "UNIT 10 (page 1)",
            "UNIT 2 (page 2)",
            "alpha battery (page 3)",
        ]
        assert [i.label for i in engine.listing()] == [
            "alpha battery (page 3)",
            "UNIT 2 (page 2)",
            "UNIT 10 (page 1)",
        ]
    
    def test_jump_to_listing(self, engine, first_document):
        """Test quick jump lookups leave the search cycle alone."""
        engine.rebuild(first_document)
        engine.search("hill creek")
        
        item = engine.jump_to_listing(2)
        assert item.label == "HILL CREEK UNIT 10-29F (page 2)"
        assert engine.jump_to_listing(9) is None
        assert engine.search("hill creek").page_number == 2
    
    def test_get_stats(self, engine, first_document):
        """Test engine statistics."""
        engine.rebuild(first_document, document_id="nov.pdf")
        engine.search("10-28")
        engine.search("10-28")
        engine.search("")
        
        stats = engine.get_stats()
        assert stats["documents_loaded"] == 1
        assert stats["total_queries"] == 3
        assert stats["matches"] == 2
        assert stats["no_matches"] == 1
        assert stats["index_stats"]["total_entries"] == 3
        assert stats["index_stats"]["numbered_entries"] == 3
        assert stats["index_stats"]["document_id"] == "nov.pdf"
    
    def test_clear(self, engine, first_document):
        """Test dropping the document and statistics."""
        engine.rebuild(first_document)
        engine.search("10-28")
        engine.clear()
        
        assert engine.entries == []
        assert engine.get_stats()["total_queries"] == 0
        assert engine.search("10-28") is None
