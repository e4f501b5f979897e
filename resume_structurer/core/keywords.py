"""
Read-only keyword tables driving section detection and field classification.

The tables are plain data. A single DEFAULT_TABLES instance is passed into the
segmenter and each extractor as a default argument; tests can build their own
KeywordTables to exercise a rule in isolation.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Pattern, Tuple


# ===== CANONICAL SECTION NAMES =====

PERSONAL_INFO = "PersonalInfo"
SUMMARY = "Summary"
EXPERIENCE = "Experience"
EDUCATION = "Education"
SKILLS = "Skills"
PROJECTS = "Projects"
CERTIFICATIONS = "Certifications"
UNRECOGNIZED = "Unrecognized"

SECTION_TITLES: Dict[str, str] = {
    PERSONAL_INFO: "Personal Information",
    SUMMARY: "Summary",
    EXPERIENCE: "Experience",
    EDUCATION: "Education",
    SKILLS: "Skills",
    PROJECTS: "Projects",
    CERTIFICATIONS: "Certifications",
    UNRECOGNIZED: "Unrecognized Content",
}


# ===== SECTION HEADING KEYWORDS =====
# Order matters: longer phrases are listed before the single words they contain.

SECTION_KEYWORDS: Tuple[Tuple[str, str], ...] = (
    ("personal information", PERSONAL_INFO),
    ("contact information", PERSONAL_INFO),
    ("contact details", PERSONAL_INFO),
    ("contact", PERSONAL_INFO),
    ("self description", SUMMARY),
    ("summary", SUMMARY),
    ("objective", SUMMARY),
    ("about", SUMMARY),
    ("profile", SUMMARY),
    ("professional experience", EXPERIENCE),
    ("work experience", EXPERIENCE),
    ("experience", EXPERIENCE),
    ("employment", EXPERIENCE),
    ("work history", EXPERIENCE),
    ("professional", EXPERIENCE),
    ("education", EDUCATION),
    ("academic", EDUCATION),
    ("degree", EDUCATION),
    ("technical skills", SKILLS),
    ("skills", SKILLS),
    ("competencies", SKILLS),
    ("projects", PROJECTS),
    ("portfolio", PROJECTS),
    ("certifications", CERTIFICATIONS),
    ("certificates", CERTIFICATIONS),
    ("licenses", CERTIFICATIONS),
    ("unrecognized content", UNRECOGNIZED),
)


# ===== FIELD CLASSIFICATION KEYWORDS =====

JOB_TITLE_KEYWORDS: Tuple[str, ...] = (
    "engineer", "developer", "manager", "analyst", "consultant", "designer",
    "architect", "lead", "senior", "junior", "intern", "director", "specialist",
    "coordinator", "associate", "scientist", "researcher", "programmer",
    "administrator", "officer", "executive", "supervisor", "assistant", "technician",
)

DEGREE_KEYWORDS: Tuple[str, ...] = (
    r"bachelors?", r"masters?", r"ph\.?\s?d", r"doctor(?:ate)?", r"associate", r"mba",
    # Bare "MA"/"MS" are also region codes, so two-letter forms need dots or "in".
    r"[bm]\.\s?[sa]\.?", r"[bm]\.?\s?sc", r"(?:bs|ms|ba|ma)(?=\s+in\b)",
    r"b\.?\s?tech", r"m\.?\s?tech", r"b\.?\s?eng", r"m\.?\s?eng", r"diploma",
)

# Localized degree terms have no word boundaries to anchor on.
LOCALIZED_DEGREE_KEYWORDS: Tuple[str, ...] = ("学士", "硕士", "博士", "本科", "研究生")

INSTITUTION_KEYWORDS: Tuple[str, ...] = (
    "university", "college", "institute", "school", "academy", "学院", "大学",
)

SOFT_SKILL_KEYWORDS: Tuple[str, ...] = (
    "leadership", "communication", "teamwork", "collaboration", "problem solving",
    "critical thinking", "time management", "project management", "adaptability",
    "creativity", "analytical", "attention to detail", "negotiation", "public speaking",
    "conflict resolution", "emotional intelligence", "mentoring",
)

TECH_KEYWORDS: Tuple[str, ...] = (
    "python", "javascript", "typescript", "java", "c++", "c#", "go", "rust", "php",
    "ruby", "swift", "kotlin", "react", "vue", "angular", "nextjs", "node", "django",
    "fastapi", "spring", "express", "sql", "mysql", "mongodb", "redis", "aws", "gcp",
    "azure", "docker", "kubernetes", "git",
)

# Sub-heading substring -> skill category. First match wins.
SKILL_CATEGORY_HINTS: Tuple[Tuple[str, str], ...] = (
    ("technical", "programming"),
    ("tech", "programming"),
    ("programming", "programming"),
    ("soft", "soft-skills"),
    ("tool", "tools"),
    ("framework", "tools"),
    ("language", "language"),
)


def _alternation(words: Tuple[str, ...]) -> str:
    return "|".join(words)


@dataclass(frozen=True)
class KeywordTables:
    section_keywords: Tuple[Tuple[str, str], ...] = SECTION_KEYWORDS
    job_title_keywords: Tuple[str, ...] = JOB_TITLE_KEYWORDS
    degree_keywords: Tuple[str, ...] = DEGREE_KEYWORDS
    localized_degree_keywords: Tuple[str, ...] = LOCALIZED_DEGREE_KEYWORDS
    institution_keywords: Tuple[str, ...] = INSTITUTION_KEYWORDS
    soft_skill_keywords: Tuple[str, ...] = SOFT_SKILL_KEYWORDS
    tech_keywords: Tuple[str, ...] = TECH_KEYWORDS
    skill_category_hints: Tuple[Tuple[str, str], ...] = SKILL_CATEGORY_HINTS

    job_title_re: Pattern = field(init=False, repr=False, compare=False)
    degree_re: Pattern = field(init=False, repr=False, compare=False)
    institution_re: Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Frozen dataclass: compiled patterns are derived once here.
        object.__setattr__(
            self, "job_title_re",
            re.compile(r"\b(?:" + _alternation(self.job_title_keywords) + r")s?\b", re.IGNORECASE),
        )
        degree = r"\b(?:" + _alternation(self.degree_keywords) + r")\b"
        if self.localized_degree_keywords:
            degree += "|" + _alternation(self.localized_degree_keywords)
        object.__setattr__(self, "degree_re", re.compile(degree, re.IGNORECASE))
        object.__setattr__(
            self, "institution_re",
            re.compile(_alternation(self.institution_keywords), re.IGNORECASE),
        )

    def section_for_heading(self, heading: str) -> str | None:
        """Map a heading text to its canonical section name (equals / starts-with / ends-with)."""
        t = " ".join(heading.strip().lower().split())
        t = t.rstrip(":").strip()
        if not t:
            return None
        for keyword, section in self.section_keywords:
            if t == keyword or t.startswith(keyword + " ") or t.endswith(" " + keyword):
                return section
        return None

    def skill_category_for_heading(self, heading: str) -> str:
        t = heading.lower()
        for hint, category in self.skill_category_hints:
            if hint in t:
                return category
        return "other"


DEFAULT_TABLES = KeywordTables()
