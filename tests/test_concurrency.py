"""
Тесты конкурентного допуска бронирований.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta

from hotel_booking.booking.domain import Reservation, RoomOccupied, User

WORKERS = 16


def test_only_one_of_concurrent_overlapping_reservations_wins(registry, steve: User, room10):
    barrier = threading.Barrier(WORKERS)

    def attempt(offset: int) -> bool:
        check_in = date(2025, 9, 5) + timedelta(days=offset % 3)
        candidate = Reservation.create(
            steve.id, 10, check_in, check_in + timedelta(days=5)
        )
        barrier.wait()
        try:
            registry.add_reservation(candidate)
        except RoomOccupied:
            return False
        return True

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        results = list(pool.map(attempt, range(WORKERS)))

    assert results.count(True) == 1
    assert len(registry.reservations) == 1


def test_concurrent_disjoint_reservations_all_succeed(registry, steve: User, room10):
    barrier = threading.Barrier(WORKERS)

    def attempt(offset: int) -> None:
        check_in = date(2025, 9, 5) + timedelta(days=2 * offset)
        candidate = Reservation.create(
            steve.id, 10, check_in, check_in + timedelta(days=2)
        )
        barrier.wait()
        registry.add_reservation(candidate)

    with ThreadPoolExecutor(max_workers=WORKERS) as pool:
        list(pool.map(attempt, range(WORKERS)))

    reservations = sorted(registry.reservations, key=lambda r: r.check_in)
    assert len(reservations) == WORKERS
    for earlier, later in zip(reservations, reservations[1:]):
        assert not earlier.period.overlaps(later.period)
