from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service configuration loaded from environment variables (RESUME_STRUCTURER_*)."""

    model_config = SettingsConfigDict(
        env_prefix="RESUME_STRUCTURER_",
        env_file=".env",
        extra="ignore",
    )

    # Layout reconstruction (PDF units)
    line_break_threshold: float = 5.0
    word_gap_threshold: float = 3.0
    glyph_width: float = 5.0  # no font metrics, every glyph is assumed this wide

    # Confidence model
    review_threshold: int = 70
    empty_resume_confidence: int = 30

    # Assembler
    parallel_extractors: bool = False
    max_workers: int = 4

    # HTTP layer
    max_upload_bytes: int = 10 * 1024 * 1024
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
