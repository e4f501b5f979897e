"""Date-range detection and ISO normalization for resume headers."""

import re
from typing import Optional, Tuple


MONTHS = {
    "january": "01", "february": "02", "march": "03", "april": "04",
    "may": "05", "june": "06", "july": "07", "august": "08",
    "september": "09", "october": "10", "november": "11", "december": "12",
    "jan": "01", "feb": "02", "mar": "03", "apr": "04", "jun": "06",
    "jul": "07", "aug": "08", "sep": "09", "sept": "09", "oct": "10",
    "nov": "11", "dec": "12",
}
MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

MONTH_NAME = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)"
)
# Four-digit years only; "Jan 21" is deliberately not a date.
DATE_TOKEN = rf"(?:\b{MONTH_NAME}\.?\s+\d{{4}}|\d{{1,2}}/\d{{4}}|\d{{4}})"
RANGE_SEPARATOR = r"\s*(?:[-–—]|\bto\b)\s*"

EXPERIENCE_OPEN_ENDS = ("present", "current", "now", "今")
EDUCATION_OPEN_ENDS = ("present", "current", "expected", "预计")
PROJECT_OPEN_ENDS = ("present", "current", "ongoing")


def _range_re(open_ends: Tuple[str, ...]) -> re.Pattern:
    open_alt = "|".join(re.escape(w) for w in open_ends)
    return re.compile(
        rf"(?<!\d)({DATE_TOKEN}){RANGE_SEPARATOR}({DATE_TOKEN}|{open_alt})(?!\d)",
        re.IGNORECASE,
    )


EXPERIENCE_RANGE_RE = _range_re(EXPERIENCE_OPEN_ENDS)
EDUCATION_RANGE_RE = _range_re(EDUCATION_OPEN_ENDS)
PROJECT_RANGE_RE = _range_re(PROJECT_OPEN_ENDS)
ANY_RANGE_RE = _range_re(tuple(dict.fromkeys(EXPERIENCE_OPEN_ENDS + EDUCATION_OPEN_ENDS + PROJECT_OPEN_ENDS)))

YEAR_RE = re.compile(r"^\d{4}$")
MM_YYYY_RE = re.compile(r"^(\d{1,2})/(\d{4})$")
MONTH_YYYY_RE = re.compile(r"^([A-Za-z]+)\.?\s+(\d{4})$")


def normalize_date(date_str: str) -> str:
    """
    Normalize a resume date to YYYY-MM-DD.

    Examples:
        "2021"       -> "2021-01-01"
        "03/2020"    -> "2020-03-01"
        "March 2019" -> "2019-03-01"
        "Sept. 2018" -> "2018-09-01"
        "Summer 2020" -> "Summer 2020" (unknown month word, passed through)
    """
    s = date_str.strip()

    if YEAR_RE.match(s):
        return f"{s}-01-01"

    m = MM_YYYY_RE.match(s)
    if m and 1 <= int(m.group(1)) <= 12:
        return f"{m.group(2)}-{int(m.group(1)):02d}-01"

    m = MONTH_YYYY_RE.match(s)
    if m:
        month = MONTHS.get(m.group(1).lower())
        if month:
            return f"{m.group(2)}-{month}-01"

    return s


def parse_date_range(
    text: str,
    pattern: re.Pattern = EXPERIENCE_RANGE_RE,
) -> Optional[Tuple[str, Optional[str], bool]]:
    """
    Find a date range in text.

    Returns (start, end, is_open_ended) with dates normalized, end None when the
    range is open-ended ("Present", "Ongoing", ...), or None when no range exists.
    """
    m = pattern.search(text)
    if not m:
        return None
    start = normalize_date(m.group(1))
    end_raw = m.group(2)
    if not re.search(r"\d", end_raw):
        return start, None, True
    return start, normalize_date(end_raw), False


def format_display_date(iso_date: Optional[str]) -> str:
    """Render YYYY-MM-DD as "Mon YYYY"; None/empty renders as "Present"."""
    if not iso_date:
        return "Present"
    parts = iso_date.split("-")
    if len(parts) >= 2 and parts[0].isdigit() and parts[1].isdigit():
        month_idx = int(parts[1]) - 1
        if 0 <= month_idx < 12:
            return f"{MONTH_ABBREVIATIONS[month_idx]} {parts[0]}"
    return iso_date
