from io import BytesIO
import logging
from typing import Any, List

import pdfplumber

from resume_structurer.core.errors import DocumentExtractionError
from resume_structurer.core.schemas import TextFragment

logger = logging.getLogger(__name__)


def _page_fragments(page: Any, *, x_tolerance: float = 1.5, y_tolerance: float = 2) -> List[TextFragment]:
    """
    Turn a pdfplumber page into positioned fragments in reading order.

    Uses word objects rather than single characters: pdfplumber already merges
    glyphs closer than x_tolerance, so each fragment is a word or a lone list
    glyph. Coordinates are the word's left edge (x0) and top edge (top).
    """
    words = page.extract_words(
        x_tolerance=x_tolerance,
        y_tolerance=y_tolerance,
        keep_blank_chars=False,
        use_text_flow=True,
    )
    return [TextFragment(text=w["text"], x=float(w["x0"]), y=float(w["top"])) for w in words]


def extract_pdf_fragments(pdf_bytes: bytes) -> List[List[TextFragment]]:
    """
    Extract per-page positioned text fragments from a PDF.

    Raises DocumentExtractionError when the stream is unreadable or when no
    page carries a text layer (scanned PDFs; OCR is not supported).
    """
    pages: List[List[TextFragment]] = []
    try:
        with pdfplumber.open(BytesIO(pdf_bytes)) as pdf:
            for page in pdf.pages:
                pages.append(_page_fragments(page))
    except Exception as exc:
        raise DocumentExtractionError(f"PDF could not be parsed: {exc}") from exc

    if not any(pages):
        raise DocumentExtractionError("PDF appears to have no extractable text. OCR is not supported.")

    logger.debug(f"Extracted {sum(len(p) for p in pages)} fragment(s) from {len(pages)} PDF page(s)")
    return pages
