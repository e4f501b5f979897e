"""
Test suite for confidence scoring.

Record confidence is a fold over fired rules; the resume-level score is the
mean of every record and decides whether a human needs to review it.
"""

from fastapi.testclient import TestClient

from resume_structurer.core import confidence_calculator as cc
from resume_structurer.core.confidence_calculator import ConfidenceCalculator
from resume_structurer.main import app

client = TestClient(app)


def test_fold_starts_at_baseline():
    assert ConfidenceCalculator.fold([]) == 50


def test_fold_sums_fired_rules():
    assert ConfidenceCalculator.fold([cc.DATE_RANGE, cc.JOB_TITLE, cc.COMPANY]) == 90
    assert ConfidenceCalculator.fold([cc.PROJECT_NAME, cc.DATE_RANGE]) == 85


def test_fold_clamps_once_at_the_end():
    assert ConfidenceCalculator.fold([("bonus", 40), ("bonus", 40), ("penalty", -30)]) == 100
    assert ConfidenceCalculator.fold([("penalty", -80)]) == 0
    # intermediate sums above 100 are not clamped
    assert ConfidenceCalculator.fold([("bonus", 60), ("penalty", -30)]) == 80


def test_reasons_keep_firing_order():
    assert ConfidenceCalculator.reasons([cc.JOB_TITLE, cc.DATE_RANGE]) == ["job_title", "date_range"]


def test_overall_is_rounded_mean():
    assert ConfidenceCalculator.overall([90, 70, 70]) == 77
    assert ConfidenceCalculator.overall([100]) == 100


def test_overall_for_empty_resume():
    assert ConfidenceCalculator.overall([]) == 30
    assert ConfidenceCalculator.overall([], empty_default=10) == 10


def test_needs_review_threshold():
    assert ConfidenceCalculator.needs_review(69) is True
    assert ConfidenceCalculator.needs_review(70) is False
    assert ConfidenceCalculator.needs_review(80, threshold=85) is True


def test_skill_confidence():
    assert ConfidenceCalculator.skill() == 70
    assert ConfidenceCalculator.skill(user_entered=True) == 100


def test_confidence_scores_present_in_response():
    resume_text = """JOHN DOE
john.doe@example.com
555-123-4567

Skills
Python, JavaScript, AWS, SQL
"""
    response = client.post(
        "/parse",
        files={"file": ("resume.txt", resume_text.encode(), "text/plain")}
    )

    assert response.status_code == 200
    structured = response.json()["structured"]

    assert structured["personalInfo"]["confidence"] == 80
    assert [s["confidence"] for s in structured["skills"]] == [70, 70, 70, 70]
    # (80 + 70 * 4) / 5
    assert structured["overallConfidence"] == 72
    assert structured["needsReview"] is False
    assert structured["warnings"] == ["No work experience found", "No education found"]


def test_sparse_resume_needs_review():
    response = client.post(
        "/parse",
        files={"file": ("resume.txt", b"Just some notes about my career goals and hobbies", "text/plain")}
    )

    assert response.status_code == 200
    structured = response.json()["structured"]
    assert structured["overallConfidence"] == 30
    assert structured["needsReview"] is True
    assert len(structured["warnings"]) == 4
