"""
Entry adapters onto the single structuring pipeline.

- plain text / markdown (DOCX, TXT, MD, JSON body): assemble directly
- positioned PDF fragments: reconstruct layout, synthesize markdown headings,
  then assemble the synthesized markdown

Both return the structured resume together with its canonical markdown.
"""

import logging
from typing import Optional, Sequence

from resume_structurer.core.config import Settings
from resume_structurer.core.heading_synthesizer import synthesize_markdown
from resume_structurer.core.keywords import DEFAULT_TABLES, KeywordTables
from resume_structurer.core.layout_reconstructor import reconstruct_document_text
from resume_structurer.core.markdown_renderer import render_markdown
from resume_structurer.core.resume_assembler import assemble_resume
from resume_structurer.core.schemas import ParseResponse, TextFragment

logger = logging.getLogger(__name__)


def parse_text_to_response(
    text: str,
    *,
    tables: KeywordTables = DEFAULT_TABLES,
    settings: Optional[Settings] = None,
) -> ParseResponse:
    structured = assemble_resume(text, tables=tables, settings=settings)
    return ParseResponse(text=text, structured=structured, markdown=render_markdown(structured, tables))


def parse_fragments_to_response(
    pages: Sequence[Sequence[TextFragment]],
    *,
    tables: KeywordTables = DEFAULT_TABLES,
    settings: Optional[Settings] = None,
) -> ParseResponse:
    """Positioned fragments -> linearized text -> synthesized markdown -> ParsedResume."""
    thresholds = {}
    if settings is not None:
        thresholds = {
            "line_break_threshold": settings.line_break_threshold,
            "word_gap_threshold": settings.word_gap_threshold,
            "glyph_width": settings.glyph_width,
        }
    linear = reconstruct_document_text(pages, **thresholds)
    markdown = synthesize_markdown(linear, tables)
    logger.debug(f"Synthesized markdown: {len(linear)} -> {len(markdown)} chars")
    return parse_text_to_response(markdown, tables=tables, settings=settings)
