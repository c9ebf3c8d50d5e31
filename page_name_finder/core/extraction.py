"""Per-page text extraction from PDF documents using PyMuPDF."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import AsyncIterator, List, Tuple

import fitz  # PyMuPDF
import structlog

logger = structlog.get_logger(__name__)

# MuPDF is not thread-safe: every fitz call (open, get_text, close) runs on this one thread
_PDF_EXECUTOR = ThreadPoolExecutor(max_workers=1, thread_name_prefix="pymupdf")


class DocumentExtractionError(ValueError):
    """Raised when a document cannot be opened for text extraction."""


def open_pdf(data: bytes) -> "fitz.Document":
    """
    Open PDF bytes.
    
    Raises:
        DocumentExtractionError: If the bytes are empty or not a readable PDF
    """
    if not data:
        raise DocumentExtractionError("Document is empty")
    
    try:
        return fitz.open(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise DocumentExtractionError(f"Unable to open PDF: {e}") from e


def page_text(page: "fitz.Page") -> str:
    """Concatenate the text items of a page, separated by single spaces."""
    return " ".join(word[4] for word in page.get_text("words"))


def _extract_all(data: bytes) -> List[str]:
    with open_pdf(data) as document:
        return [page_text(page) for page in document]


def _open_counted(data: bytes) -> Tuple["fitz.Document", int]:
    document = open_pdf(data)
    return document, document.page_count


def _page_text_at(document: "fitz.Document", index: int) -> str:
    return page_text(document[index])


def extract_pages_text(data: bytes) -> List[str]:
    """
    Extract one text block per page, in page order.
    
    Args:
        data: Raw PDF bytes
        
    Returns:
        List of page texts, index 0 being page 1
    """
    pages = _PDF_EXECUTOR.submit(_extract_all, data).result()
    
    logger.debug("pages_extracted", page_count=len(pages))
    return pages


async def iter_pages_text(data: bytes) -> AsyncIterator[Tuple[int, str]]:
    """
    Yield ``(page_number, text)`` pairs one page at a time.
    
    Each page is extracted on the PDF worker thread so the event loop keeps
    serving requests while a large document is indexed. Close the generator
    (``contextlib.aclosing``) when stopping early so the document is released
    right away.
    """
    loop = asyncio.get_running_loop()
    document, page_count = await loop.run_in_executor(_PDF_EXECUTOR, _open_counted, data)
    try:
        for index in range(page_count):
            text = await loop.run_in_executor(_PDF_EXECUTOR, _page_text_at, document, index)
            yield index + 1, text
    finally:
        await loop.run_in_executor(_PDF_EXECUTOR, document.close)
