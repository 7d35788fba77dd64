"""
Общие фикстуры для тестов контекста бронирования.
"""

from datetime import date

import pytest

from hotel_booking.booking.config import BookingSettings, OverlapStrategy
from hotel_booking.booking.domain import Room, RoomClass, User, UserRole
from hotel_booking.booking.registry import BookingRegistry

TODAY = date(2025, 9, 1)


@pytest.fixture
def today() -> date:
    """Фиксированная "текущая" дата реестра."""
    return TODAY


@pytest.fixture(params=[OverlapStrategy.SCAN, OverlapStrategy.QUERY], ids=lambda s: s.value)
def settings(request) -> BookingSettings:
    """Обе стратегии поиска пересечений должны вести себя одинаково."""
    return BookingSettings(reject_past_dates=True, overlap_strategy=request.param)


@pytest.fixture
def registry(settings: BookingSettings, today: date) -> BookingRegistry:
    """Пустой реестр с фиксированной текущей датой."""
    return BookingRegistry(settings=settings, clock=lambda: today)


@pytest.fixture
def steve(registry: BookingRegistry) -> User:
    user = User(name="Steven")
    registry.add_user(user)
    return user


@pytest.fixture
def donald(registry: BookingRegistry) -> User:
    user = User(name="Donald", role=UserRole.ADMIN)
    registry.add_user(user)
    return user


@pytest.fixture
def room10(registry: BookingRegistry) -> Room:
    room = Room(number=10, room_class=RoomClass.ECONOMY)
    registry.add_room(room)
    return room


@pytest.fixture
def room11(registry: BookingRegistry) -> Room:
    room = Room(number=11, room_class=RoomClass.LUXURY)
    registry.add_room(room)
    return room
