"""
Тесты для объекта-значения DateRange и предиката пересечения.
"""

from datetime import date, timedelta
from itertools import product

import pytest
from pydantic import ValidationError

from hotel_booking.shared_kernel import DateRange


def period(start: str, end: str) -> DateRange:
    return DateRange(check_in=date.fromisoformat(start), check_out=date.fromisoformat(end))


SAMPLE_RANGES = [
    period("2025-09-05", "2025-09-12"),
    period("2025-09-08", "2025-09-15"),
    period("2025-09-12", "2025-09-15"),
    period("2025-09-01", "2025-09-04"),
    period("2025-09-06", "2025-09-10"),
    period("2025-09-12", "2025-09-12"),
    period("2025-09-11", "2025-09-11"),
    period("2025-09-01", "2025-09-30"),
]


class TestDateRange:
    """Тесты для DateRange."""

    @pytest.mark.parametrize(
        "a, b", list(product(SAMPLE_RANGES, repeat=2)), ids=lambda r: str(r)
    )
    def test_overlap_is_symmetric(self, a: DateRange, b: DateRange):
        assert a.overlaps(b) == b.overlaps(a)

    def test_adjacent_ranges_do_not_overlap(self):
        first = period("2025-09-05", "2025-09-12")
        second = period("2025-09-12", "2025-09-15")
        assert not first.overlaps(second)

    def test_partially_shared_days_overlap(self):
        assert period("2025-09-05", "2025-09-12").overlaps(
            period("2025-09-08", "2025-09-15")
        )

    def test_nested_range_overlaps(self):
        assert period("2025-09-01", "2025-09-30").overlaps(
            period("2025-09-10", "2025-09-11")
        )

    def test_single_day_range_occupies_its_day(self):
        single = period("2025-09-12", "2025-09-12")
        assert single.occupied_until == date(2025, 9, 13)
        assert single.overlaps(period("2025-09-12", "2025-09-13"))
        assert single.overlaps(period("2025-09-10", "2025-09-13"))
        assert single.overlaps(single)

    def test_single_day_range_is_adjacent_to_neighbours(self):
        single = period("2025-09-12", "2025-09-12")
        assert not single.overlaps(period("2025-09-05", "2025-09-12"))
        assert not single.overlaps(period("2025-09-13", "2025-09-15"))

    def test_inverted_range_is_allowed_but_flagged(self):
        inverted = period("2025-09-10", "2025-09-01")
        assert inverted.is_inverted
        assert not period("2025-09-01", "2025-09-01").is_inverted

    def test_nights(self):
        assert period("2025-09-05", "2025-09-12").nights == 7
        start = date(2025, 9, 5)
        assert DateRange(check_in=start, check_out=start + timedelta(days=1)).nights == 1

    def test_parses_iso_dates(self):
        parsed = DateRange(check_in="2025-09-05", check_out="2025-09-12")
        assert parsed.check_in == date(2025, 9, 5)
        assert str(parsed) == "[2025-09-05, 2025-09-12)"

    def test_is_immutable(self):
        value = period("2025-09-05", "2025-09-12")
        with pytest.raises(ValidationError):
            value.check_out = date(2025, 9, 20)
