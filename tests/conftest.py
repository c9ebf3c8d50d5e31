"""Shared pytest fixtures."""

import fitz  # PyMuPDF
import pytest


@pytest.fixture
def make_pdf():
    """Build an in-memory PDF with one text line per page entry."""
    def _make_pdf(pages):
        document = fitz.open()
        for lines in pages:
            page = document.new_page()
            for offset, line in enumerate(lines):
                page.insert_text((72, 72 + 20 * offset), line)
        data = document.tobytes()
        document.close()
        return data
    
    return _make_pdf
