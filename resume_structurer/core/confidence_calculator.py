"""
Confidence scoring for structured resume records.

A record's confidence is a fold over the classification decisions made while
parsing it: every rule that fires contributes a fixed delta to a base score,
and the sum is clamped to [0, 100] once at the end. Extractors collect
(rule, delta) contributions instead of mutating a running score, so each rule
can be tested in isolation.

Confidence Scale:
  100  = User-entered value
  85+  = Header fully classified (date range, title/degree, organisation)
  70   = Heuristically classified skill
  50   = Baseline, nothing matched beyond the record existing
  30   = Empty resume (no records at all)
"""

from typing import Iterable, List, Optional, Tuple


Contribution = Tuple[str, int]

MIN_CONFIDENCE = 0
MAX_CONFIDENCE = 100

RECORD_BASELINE = 50
HEURISTIC_SKILL_CONFIDENCE = 70
USER_SKILL_CONFIDENCE = 100

# Rule deltas
DATE_RANGE = ("date_range", 15)
JOB_TITLE = ("job_title", 15)
COMPANY = ("company", 10)
DEGREE = ("degree", 15)
INSTITUTION = ("institution_keyword", 10)
PROJECT_NAME = ("project_name", 20)
EMAIL = ("email", 10)
PHONE = ("phone", 10)
LINKEDIN = ("linkedin", 10)
GITHUB = ("github", 10)
NAME = ("name", 10)


class ConfidenceCalculator:
    """Central place for all extraction confidence logic."""

    @staticmethod
    def clamp(value: float) -> int:
        return int(max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, round(value))))

    @staticmethod
    def fold(contributions: Iterable[Contribution], base: int = RECORD_BASELINE) -> int:
        """Sum the deltas of every fired rule onto the base score, clamped once."""
        total = base
        for _rule, delta in contributions:
            total += delta
        return ConfidenceCalculator.clamp(total)

    @staticmethod
    def reasons(contributions: Iterable[Contribution]) -> List[str]:
        """Names of the rules that fired, in firing order."""
        return [rule for rule, _delta in contributions]

    @staticmethod
    def overall(scores: List[int], empty_default: int = 30) -> int:
        """
        Unweighted mean of every record's confidence.

        A resume with zero extracted records has no mean; it gets
        empty_default instead.
        """
        if not scores:
            return ConfidenceCalculator.clamp(empty_default)
        return ConfidenceCalculator.clamp(sum(scores) / len(scores))

    @staticmethod
    def needs_review(overall_confidence: int, threshold: int = 70) -> bool:
        return overall_confidence < threshold

    @staticmethod
    def skill(user_entered: bool = False) -> int:
        return USER_SKILL_CONFIDENCE if user_entered else HEURISTIC_SKILL_CONFIDENCE

    @staticmethod
    def record_scores(
        personal_confidence: Optional[int],
        *record_lists: Iterable,
    ) -> List[int]:
        """Flatten every record's confidence; personal info counts once when present."""
        scores: List[int] = []
        if personal_confidence is not None:
            scores.append(personal_confidence)
        for records in record_lists:
            scores.extend(r.confidence for r in records)
        return scores
