from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


SkillCategory = Literal["programming", "tools", "soft-skills", "language", "other"]
Confidence = int  # 0 to 100, additive heuristic score


@dataclass
class TextFragment:
    """A positioned run of text on a page, in natural reading order."""
    text: str
    x: float
    y: float


class ResumeModel(BaseModel):
    """Immutable snapshot; JSON uses the camelCase field names of the resume contract."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class PersonalInfo(ResumeModel):
    name: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    linked_in: Optional[str] = Field(default=None, alias="linkedIn")
    github: Optional[str] = None
    portfolio: Optional[str] = None
    confidence: Confidence = Field(default=50, ge=0, le=100)


class Experience(ResumeModel):
    company: str = ""
    title: str = ""
    location: Optional[str] = None
    start_date: str = ""  # YYYY-MM-DD, "" when the header carried no date
    end_date: Optional[str] = None  # None + is_current=False means unknown end
    is_current: bool = False
    description: List[str] = Field(default_factory=list)
    confidence: Confidence = Field(default=50, ge=0, le=100)
    order: int = Field(default=0, ge=0)


class Education(ResumeModel):
    institution: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: Optional[str] = None
    gpa: Optional[str] = None
    description: List[str] = Field(default_factory=list)
    confidence: Confidence = Field(default=50, ge=0, le=100)
    order: int = Field(default=0, ge=0)


class Project(ResumeModel):
    name: str
    description: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)
    url: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None  # None = ongoing
    confidence: Confidence = Field(default=50, ge=0, le=100)
    order: int = Field(default=0, ge=0)


class Skill(ResumeModel):
    name: str
    category: SkillCategory = "other"
    confidence: Confidence = Field(default=70, ge=0, le=100)
    frequency: Optional[int] = None


class ParsedResume(ResumeModel):
    raw_text: str
    personal_info: Optional[PersonalInfo] = None
    summary: Optional[str] = None
    experiences: List[Experience] = Field(default_factory=list)
    education: List[Education] = Field(default_factory=list)
    skills: List[Skill] = Field(default_factory=list)
    projects: List[Project] = Field(default_factory=list)
    certifications: List[str] = Field(default_factory=list)
    unrecognized: List[str] = Field(default_factory=list, description="Lines under headings no section claims, kept verbatim")
    overall_confidence: Confidence = Field(..., ge=0, le=100)
    needs_review: bool
    warnings: List[str] = Field(default_factory=list)
    errors: List[str] = Field(default_factory=list)
    parsed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ParseResponse(ResumeModel):
    text: str = Field(..., description="Linearized/markdown text the structure was parsed from")
    structured: ParsedResume
    markdown: str = Field(..., description="Canonical markdown rendering of the structured resume")


class TextParseRequest(ResumeModel):
    text: str = Field(..., description="Plain or markdown resume text")


class RenderResponse(ResumeModel):
    markdown: str
