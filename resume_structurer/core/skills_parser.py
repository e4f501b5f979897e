"""
Skills classification.

Operates on the flat line list of the Skills section. A "### Heading" (or an
inline "Label: a, b" prefix) sets the category context; every comma/semicolon
separated name is then classified in priority order:
  1. soft-skill phrase substring  -> soft-skills
  2. core-technology substring    -> programming
  3. symbol (+ # . - /) or ALLCAPS -> programming
  4. otherwise the current context (default "other")

This is a bag-of-keywords classifier; misclassifications are expected. Every
classified skill gets the same heuristic confidence.
"""

import logging
import re
from typing import List, Optional, Set

from resume_structurer.core.confidence_calculator import ConfidenceCalculator
from resume_structurer.core.keywords import DEFAULT_TABLES, KeywordTables
from resume_structurer.core.record_partition import H3_RE, strip_bullet
from resume_structurer.core.schemas import Skill, SkillCategory

logger = logging.getLogger(__name__)

SKILL_SPLIT_RE = re.compile(r"[,;]")
TECH_SYMBOL_RE = re.compile(r"[+#.\-/]")
ALL_CAPS_RE = re.compile(r"[A-Z]{2,}")
INLINE_LABEL_RE = re.compile(r"^([A-Za-z][A-Za-z &/+-]{1,40}):(?!//)\s*(.+)$")

MIN_SKILL_LENGTH = 2


def classify_skill(
    name: str,
    context: SkillCategory = "other",
    tables: KeywordTables = DEFAULT_TABLES,
) -> SkillCategory:
    lower = name.lower()
    if any(k in lower for k in tables.soft_skill_keywords):
        return "soft-skills"
    if any(k in lower for k in tables.tech_keywords):
        return "programming"
    if TECH_SYMBOL_RE.search(name) or ALL_CAPS_RE.fullmatch(name):
        return "programming"
    return context


def user_skill(name: str, category: SkillCategory = "other") -> Skill:
    """A skill typed in by the candidate; trusted fully."""
    return Skill(name=name.strip(), category=category, confidence=ConfidenceCalculator.skill(user_entered=True))


def parse_skills(lines: List[str], tables: KeywordTables = DEFAULT_TABLES) -> List[Skill]:
    skills: List[Skill] = []
    seen: Set[str] = set()
    current: SkillCategory = "other"

    for line in lines:
        t = line.strip()
        if not t:
            continue

        m = H3_RE.match(t)
        if m:
            current = tables.skill_category_for_heading(m.group(1))
            logger.debug(f"Skill category context: '{m.group(1)}' -> {current}")
            continue

        bullet = strip_bullet(t)
        text = bullet if bullet is not None else t
        if text.startswith("#"):
            continue

        context: SkillCategory = current
        label = INLINE_LABEL_RE.match(text)
        if label:
            hinted = tables.skill_category_for_heading(label.group(1))
            if hinted != "other":
                context = hinted
            text = label.group(2)

        for raw in SKILL_SPLIT_RE.split(text):
            name = raw.strip()
            if len(name) < MIN_SKILL_LENGTH:
                continue
            key = name.lower()
            if key in seen:
                continue
            seen.add(key)
            skills.append(Skill(
                name=name,
                category=classify_skill(name, context, tables),
                confidence=ConfidenceCalculator.skill(),
            ))

    return skills


def count_mentions(name: str, text: str) -> Optional[int]:
    """Case-insensitive whole-token occurrences of a skill name in the source text."""
    if not name or not text:
        return None
    pattern = re.compile(r"(?<![\w])" + re.escape(name.lower()) + r"(?![\w])")
    return len(pattern.findall(text.lower()))
