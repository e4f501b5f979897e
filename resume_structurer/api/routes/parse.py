import logging

from fastapi import APIRouter, File, HTTPException, UploadFile

from resume_structurer.core.config import get_settings
from resume_structurer.core.docx_extractor import extract_docx_text
from resume_structurer.core.errors import DocumentExtractionError
from resume_structurer.core.markdown_renderer import render_markdown
from resume_structurer.core.pdf_extractor import extract_pdf_fragments
from resume_structurer.core.schemas import (
    ParsedResume,
    ParseResponse,
    RenderResponse,
    TextParseRequest,
)
from resume_structurer.core.text_parser import (
    parse_fragments_to_response,
    parse_text_to_response,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["parse"])

DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_CONTENT_TYPES = {"text/plain", "text/markdown", "application/json"}


@router.post(
    "/parse",
    response_model=ParseResponse,
    response_model_by_alias=True,
    summary="Parse Resume",
    description="Structure a resume file (PDF, DOCX, TXT or MD) into confidence-scored records.",
    responses={
        200: {
            "description": "Successfully parsed resume",
            "content": {
                "application/json": {
                    "example": {
                        "text": "## Personal Information\n\nJane Doe\n...",
                        "structured": {
                            "rawText": "...",
                            "personalInfo": {
                                "name": "Jane Doe",
                                "email": "jane@example.com",
                                "phone": "(555) 123-4567",
                                "location": "San Francisco, CA",
                                "confidence": 80,
                            },
                            "experiences": [
                                {
                                    "company": "Acme Corp",
                                    "title": "Senior Engineer",
                                    "startDate": "2020-01-01",
                                    "endDate": None,
                                    "isCurrent": True,
                                    "description": ["Built the billing platform"],
                                    "confidence": 90,
                                    "order": 0,
                                }
                            ],
                            "overallConfidence": 78,
                            "needsReview": False,
                            "warnings": ["No education found"],
                            "errors": [],
                        },
                        "markdown": "## Personal Information\n\nJane Doe\n...",
                    }
                }
            },
        },
        400: {"description": "Empty file uploaded"},
        413: {"description": "File larger than the configured upload limit"},
        415: {"description": "Unsupported file format"},
        422: {"description": "File is corrupt or has no extractable text"},
    },
)
async def parse_resume(
    file: UploadFile = File(..., description="Resume file (PDF, DOCX, TXT or MD)")
):
    """
    Parse a resume file.

    **Supported formats:**
    - PDF (.pdf) - text layer only, OCR not supported
    - DOCX (.docx)
    - TXT / MD (.txt, .md)

    Low-confidence results are returned with `needsReview` set and warnings,
    never as an error.
    """
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")

    settings = get_settings()
    if len(raw) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"File exceeds the {settings.max_upload_bytes} byte upload limit.",
        )

    filename = (file.filename or "").lower()
    content_type = (file.content_type or "").lower()

    try:
        # PDF
        if filename.endswith(".pdf") or content_type == "application/pdf":
            return parse_fragments_to_response(extract_pdf_fragments(raw))
        # DOCX
        if filename.endswith(".docx") or content_type == DOCX_CONTENT_TYPE:
            return parse_text_to_response(extract_docx_text(raw))
    except DocumentExtractionError as exc:
        logger.warning(f"Extraction failed for '{file.filename}': {exc}")
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    # Text
    if content_type in TEXT_CONTENT_TYPES or filename.endswith((".txt", ".md")):
        text = raw.decode("utf-8", errors="replace")
        if not text.strip():
            raise HTTPException(status_code=422, detail="File has no extractable text.")
        return parse_text_to_response(text)

    raise HTTPException(status_code=415, detail=f"Unsupported content type: {file.content_type}")


@router.post(
    "/parse/text",
    response_model=ParseResponse,
    response_model_by_alias=True,
    summary="Parse Resume Text",
    description="Structure plain or markdown resume text sent as JSON.",
)
def parse_resume_text(body: TextParseRequest):
    if not body.text.strip():
        raise HTTPException(status_code=400, detail="Empty text.")
    return parse_text_to_response(body.text)


@router.post(
    "/render",
    response_model=RenderResponse,
    summary="Render Resume Markdown",
    description="Render a structured resume back to its canonical markdown.",
)
def render_resume(resume: ParsedResume):
    return RenderResponse(markdown=render_markdown(resume))
