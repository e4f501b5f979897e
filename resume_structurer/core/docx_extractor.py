from io import BytesIO
from typing import List

from docx import Document

from resume_structurer.core.errors import DocumentExtractionError


def extract_docx_text(docx_bytes: bytes) -> str:
    """
    Deterministically extract non-empty paragraph text from a DOCX, one
    paragraph per line. DOCX carries no glyph positions, so this text goes to
    the segmenter without layout reconstruction.
    """
    try:
        doc = Document(BytesIO(docx_bytes))
    except Exception as exc:
        raise DocumentExtractionError(f"DOCX could not be parsed: {exc}") from exc

    out: List[str] = []
    for p in doc.paragraphs:
        t = (p.text or "").strip()
        if t:
            out.append(t)
    if not out:
        raise DocumentExtractionError("DOCX has no extractable text.")
    return "\n".join(out)
