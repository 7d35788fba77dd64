"""
Тесты настроек политики бронирования.
"""

import pytest
from pydantic import ValidationError

from hotel_booking.booking.config import BookingSettings, OverlapStrategy


def test_defaults():
    settings = BookingSettings()
    assert settings.reject_past_dates is True
    assert settings.overlap_strategy == OverlapStrategy.SCAN


def test_from_env():
    settings = BookingSettings.from_env(
        {
            "HOTEL_BOOKING_REJECT_PAST_DATES": "false",
            "HOTEL_BOOKING_OVERLAP_STRATEGY": "Query",
        }
    )
    assert settings.reject_past_dates is False
    assert settings.overlap_strategy == OverlapStrategy.QUERY


def test_from_env_ignores_empty_values():
    settings = BookingSettings.from_env({"HOTEL_BOOKING_REJECT_PAST_DATES": ""})
    assert settings == BookingSettings()


def test_from_process_environment(monkeypatch):
    monkeypatch.setenv("HOTEL_BOOKING_REJECT_PAST_DATES", "0")
    monkeypatch.delenv("HOTEL_BOOKING_OVERLAP_STRATEGY", raising=False)
    assert BookingSettings.from_env().reject_past_dates is False


@pytest.mark.parametrize(
    "environ",
    [
        {"HOTEL_BOOKING_REJECT_PAST_DATES": "sometimes"},
        {"HOTEL_BOOKING_OVERLAP_STRATEGY": "guess"},
    ],
)
def test_invalid_values_are_rejected(environ):
    with pytest.raises(ValidationError):
        BookingSettings.from_env(environ)
