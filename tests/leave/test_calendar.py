from datetime import date, datetime

import pytest

from src.iakwe_hr.iakwe_hr.core.exceptions import ValidationError
from src.iakwe_hr.iakwe_hr.leave.calendar import count_leave_days, holidays_in_range, summarize_range


def test_count_is_inclusive():
    assert count_leave_days(date(2024, 3, 1), date(2024, 3, 3)) == 3
    assert count_leave_days("2024-03-01", "2024-03-01") == 1


def test_count_ignores_time_of_day():
    assert count_leave_days(datetime(2024, 3, 1, 23, 0), "2024-03-03T08:00:00Z") == 3


def test_count_is_symmetric_for_reversed_range():
    assert count_leave_days("2024-03-03", "2024-03-01") == 3


def test_invalid_date_raises_validation_error():
    with pytest.raises(ValidationError):
        count_leave_days("2024-13-01", "2024-12-01")


def test_holidays_span_year_boundary():
    names = holidays_in_range("2024-12-30", "2025-01-02")
    assert names == ["New Year's Day"]
    assert "Christmas Day" not in names


def test_holidays_in_long_range_are_deduplicated():
    names = holidays_in_range("2023-12-20", "2025-01-05")
    assert names.count("New Year's Day") == 1
    assert names.count("Christmas Day") == 1
    assert "Constitution Day" in names


def test_no_holidays_in_plain_week():
    assert holidays_in_range("2024-06-10", "2024-06-14") == []


def test_custom_table_skips_impossible_dates():
    table = [(2, 29, "Leap Day"), (6, 12, "Test Day")]
    assert holidays_in_range("2024-01-01", "2024-03-01", table) == ["Leap Day"]
    assert holidays_in_range("2023-02-01", "2023-12-31", table) == ["Test Day"]


def test_summarize_range_returns_none_until_both_dates_set():
    assert summarize_range("2024-03-01", None) is None
    assert summarize_range("", "2024-03-01") is None


def test_summarize_range_builds_notice():
    summary = summarize_range("2024-04-29", "2024-05-02")
    assert summary.total_days == 4
    assert summary.holidays == ("Constitution Day",)
    assert summary.holiday_notice == "Note: Your leave period includes these public holidays: Constitution Day"
    assert summary.to_dict()["start_date"] == "2024-04-29"


def test_summarize_range_without_holidays_has_empty_notice():
    assert summarize_range("2024-06-10", "2024-06-11").holiday_notice == ""


def test_summarize_inverted_range_carries_notice():
    summary = summarize_range("2024-03-05", "2024-03-01")
    assert summary.is_inverted
    assert summary.range_notice == "End date must be on or after the start date"
    assert summary.to_dict()["range_notice"] == summary.range_notice


def test_summarize_ordered_range_has_no_range_notice():
    assert summarize_range("2024-03-01", "2024-03-05").range_notice == ""
