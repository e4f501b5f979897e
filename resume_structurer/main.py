import logging

from fastapi import FastAPI

from resume_structurer.api.routes.parse import router as parse_router
from resume_structurer.core.config import get_settings

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Resume Structurer",
    description="Heuristic resume structuring service: turns PDF/DOCX/TXT/MD resumes into confidence-scored records",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

app.include_router(parse_router)

@app.get("/", tags=["health"])
def root():
    return {"service": "resume-structurer", "status": "running"}

@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}
