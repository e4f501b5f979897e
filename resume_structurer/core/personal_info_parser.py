import logging
import re
from typing import List, Optional

from resume_structurer.core import confidence_calculator as cc
from resume_structurer.core.confidence_calculator import ConfidenceCalculator, Contribution
from resume_structurer.core.schemas import PersonalInfo

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)*\.[A-Za-z]{2,}")
PHONE_RE = re.compile(
    r"(?:\+?1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}"
    r"|\+\d{1,3}[-.\s]?\d{2,4}[-.\s]?\d{3,4}[-.\s]?\d{3,4}"
)
LINKEDIN_RE = re.compile(
    r"(?:https?://)?(?:www\.)?linkedin\.com/in/[^\s,|]+|linkedin:\s*[^\s,|]+",
    re.IGNORECASE,
)
GITHUB_RE = re.compile(
    r"(?:https?://)?(?:www\.)?github\.com/[^\s,|]+|github:\s*[^\s,|]+",
    re.IGNORECASE,
)
PORTFOLIO_LABEL_RE = re.compile(r"\b(?:portfolio|website)\s*:\s*([^\s,|]+)", re.IGNORECASE)
WEB_URL_RE = re.compile(r"(?:https?://|www\.)[^\s,|]+", re.IGNORECASE)
LOCATION_RE = re.compile(r"\b[A-Z][a-z]+(?: [A-Z][a-z]+)*, ?[A-Z]{2}\b")

NAME_NOISE_RE = re.compile(r"[|•·]+")
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 49


def _portfolio(text: str) -> Optional[str]:
    """'Portfolio: <url>' / 'Website: <url>' first, then any non-profile web URL."""
    m = PORTFOLIO_LABEL_RE.search(text)
    if m:
        return m.group(1)
    for url in WEB_URL_RE.findall(text):
        lower = url.lower()
        if "linkedin.com" not in lower and "github.com" not in lower:
            return url
    return None


def extract_name(lines: List[str]) -> Optional[str]:
    """
    Name = first non-empty, non-heading line with email/phone/URL stripped.

    Accepted only when the cleaned residue is 2 to 49 characters.
    """
    first = next((ln.strip() for ln in lines if ln.strip() and not ln.strip().startswith("#")), None)
    if not first:
        return None
    cleaned = EMAIL_RE.sub("", first)
    cleaned = PHONE_RE.sub("", cleaned)
    cleaned = LINKEDIN_RE.sub("", cleaned)
    cleaned = GITHUB_RE.sub("", cleaned)
    cleaned = WEB_URL_RE.sub("", cleaned)
    cleaned = NAME_NOISE_RE.sub(" ", cleaned)
    cleaned = " ".join(cleaned.split()).strip(" ,;-")
    if MIN_NAME_LENGTH <= len(cleaned) <= MAX_NAME_LENGTH:
        return cleaned
    return None


def parse_personal_info(lines: List[str]) -> Optional[PersonalInfo]:
    """
    Regex-driven extraction over the joined contact block.

    Returns None when neither name, email nor phone was found.
    """
    if not lines:
        return None

    text = "\n".join(lines)
    contributions: List[Contribution] = []

    email = EMAIL_RE.search(text)
    if email:
        contributions.append(cc.EMAIL)
    # Phone digits must not come from inside a profile URL
    phone = PHONE_RE.search(LINKEDIN_RE.sub(" ", GITHUB_RE.sub(" ", text)))
    if phone:
        contributions.append(cc.PHONE)
    linkedin = LINKEDIN_RE.search(text)
    if linkedin:
        contributions.append(cc.LINKEDIN)
    github = GITHUB_RE.search(text)
    if github:
        contributions.append(cc.GITHUB)
    name = extract_name(lines)
    if name:
        contributions.append(cc.NAME)

    if not (name or email or phone):
        return None

    location = LOCATION_RE.search(text)
    info = PersonalInfo(
        name=name or "",
        email=email.group(0) if email else None,
        phone=phone.group(0).strip() if phone else None,
        location=location.group(0) if location else None,
        linked_in=linkedin.group(0) if linkedin else None,
        github=github.group(0) if github else None,
        portfolio=_portfolio(text),
        confidence=ConfidenceCalculator.fold(contributions),
    )
    logger.debug(f"Personal info: name='{info.name}', confidence={info.confidence}")
    return info
