from datetime import date, datetime, timedelta, timezone

import pytest

from br_holiday.utils.validation import (
    InvalidDateError,
    InvalidYearError,
    normalize_date,
    validate_year,
    year_of,
)


@pytest.mark.unit
class TestNormalizeDate:
    """Unit tests for date normalization."""

    def test_canonical_string_is_unchanged(self):
        assert normalize_date("2024-01-01") == "2024-01-01"

    def test_surrounding_whitespace_is_ignored(self):
        assert normalize_date(" 2024-12-25 ") == "2024-12-25"

    def test_date_object(self):
        assert normalize_date(date(2024, 3, 5)) == "2024-03-05"

    def test_naive_datetime_uses_its_own_calendar_date(self):
        assert normalize_date(datetime(2024, 12, 25, 23, 59)) == "2024-12-25"

    def test_aware_datetime_uses_local_calendar_date(self):
        """Aware values are converted to the local timezone before formatting."""
        value = datetime(2024, 12, 25, 3, 0, tzinfo=timezone(timedelta(hours=9)))
        expected = value.astimezone().date().isoformat()
        assert normalize_date(value) == expected

    def test_naive_iso_timestamp(self):
        assert normalize_date("2024-11-15T10:30:00") == "2024-11-15"

    def test_utc_timestamp_with_z_suffix(self):
        value = "2024-11-15T12:00:00Z"
        expected = (
            datetime(2024, 11, 15, 12, 0, tzinfo=timezone.utc).astimezone().date().isoformat()
        )
        assert normalize_date(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["invalid-date", "", "2024-13-45", "2024-02-30", "24-01-01", "2024/01/01"],
    )
    def test_invalid_strings_raise(self, value):
        with pytest.raises(InvalidDateError):
            normalize_date(value)

    @pytest.mark.parametrize("value", [None, 20240101, 2024.0, ["2024-01-01"]])
    def test_unsupported_types_raise(self, value):
        with pytest.raises(InvalidDateError):
            normalize_date(value)

    def test_invalid_date_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            normalize_date("not a date")

    def test_year_of(self):
        assert year_of("2031-07-04") == 2031


@pytest.mark.unit
class TestValidateYear:
    """Unit tests for year validation."""

    @pytest.mark.parametrize("year", [1900, 2024, 2100])
    def test_accepts_years_in_range(self, year):
        assert validate_year(year) == year

    @pytest.mark.parametrize("year", [1899, 2101, -1, 0])
    def test_rejects_years_out_of_range(self, year):
        with pytest.raises(InvalidYearError, match="between 1900 and 2100"):
            validate_year(year)

    @pytest.mark.parametrize("year", ["2024", 2024.0, None, True])
    def test_rejects_non_integers(self, year):
        with pytest.raises(InvalidYearError, match="integer"):
            validate_year(year)

    def test_custom_bounds(self):
        assert validate_year(1800, min_year=1800) == 1800
        with pytest.raises(InvalidYearError):
            validate_year(2050, max_year=2040)
