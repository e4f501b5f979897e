"""Tests for date-range detection and normalization."""

import pytest

from resume_structurer.core.dates import (
    EDUCATION_RANGE_RE,
    EXPERIENCE_RANGE_RE,
    PROJECT_RANGE_RE,
    format_display_date,
    normalize_date,
    parse_date_range,
)


@pytest.mark.parametrize("raw, expected", [
    ("2021", "2021-01-01"),
    ("03/2020", "2020-03-01"),
    ("3/2020", "2020-03-01"),
    ("March 2019", "2019-03-01"),
    ("Sept. 2018", "2018-09-01"),
    ("Dec 2020", "2020-12-01"),
    ("Summer 2020", "Summer 2020"),
])
def test_normalize_date(raw, expected):
    assert normalize_date(raw) == expected


def test_open_ended_experience_range():
    assert parse_date_range("Jan 2021 - Present") == ("2021-01-01", None, True)
    assert parse_date_range("2019 – now") == ("2019-01-01", None, True)


def test_closed_range():
    assert parse_date_range("Mar 2018 to Dec 2020") == ("2018-03-01", "2020-12-01", False)
    assert parse_date_range("06/2017 — 08/2019") == ("2017-06-01", "2019-08-01", False)


def test_expected_only_ends_education_ranges():
    assert parse_date_range("2020 - Expected", EDUCATION_RANGE_RE) == ("2020-01-01", None, True)
    assert parse_date_range("2020 - Expected", EXPERIENCE_RANGE_RE) is None


def test_ongoing_only_ends_project_ranges():
    assert parse_date_range("2022 - Ongoing", PROJECT_RANGE_RE) == ("2022-01-01", None, True)
    assert parse_date_range("2022 - Ongoing", EXPERIENCE_RANGE_RE) is None


def test_two_digit_years_are_not_dates():
    assert parse_date_range("Jan 21 - Mar 22") is None


def test_month_words_must_be_real_months():
    assert parse_date_range("San Francisco 2019 - 2021") == ("2019-01-01", "2021-01-01", False)


def test_range_embedded_in_longer_text():
    assert parse_date_range("Acme Corp, 2019 - 2021, Remote") == ("2019-01-01", "2021-01-01", False)


def test_no_range():
    assert parse_date_range("Acme Corp") is None


def test_format_display_date():
    assert format_display_date("2021-01-01") == "Jan 2021"
    assert format_display_date("2020-12-01") == "Dec 2020"
    assert format_display_date(None) == "Present"
    assert format_display_date("") == "Present"
    assert format_display_date("Summer 2020") == "Summer 2020"
