"""
Запрос доступности номеров.

Обе стратегии используют один и тот же предикат DateRange.overlaps,
что и допуск бронирований в реестре.
"""

from typing import Dict, Iterable, List, Optional, Set

from ..shared_kernel import DateRange
from .config import OverlapStrategy
from .domain import Reservation, Room


def find_conflicting_reservation(
    room_number: int, period: DateRange, reservations: Iterable[Reservation]
) -> Optional[Reservation]:
    """Возвращает первое бронирование номера, пересекающееся с периодом."""
    for reservation in reservations:
        if reservation.room_number != room_number:
            continue
        if reservation.period.overlaps(period):
            return reservation
    return None


def occupied_rooms(
    period: DateRange, reservations: Iterable[Reservation]
) -> Dict[int, Reservation]:
    """
    Занятые в периоде номера за один проход по бронированиям.

    Для каждого номера хранится первое пересекающееся бронирование,
    то же, что вернет find_conflicting_reservation.
    """
    occupied: Dict[int, Reservation] = {}
    for reservation in reservations:
        if reservation.period.overlaps(period):
            occupied.setdefault(reservation.room_number, reservation)
    return occupied


def occupied_room_numbers(
    period: DateRange, reservations: Iterable[Reservation]
) -> Set[int]:
    """Номера комнат, у которых есть бронирование, пересекающееся с периодом."""
    return set(occupied_rooms(period, reservations))


def find_available_rooms(
    rooms: Iterable[Room],
    reservations: Iterable[Reservation],
    period: DateRange,
    strategy: OverlapStrategy = OverlapStrategy.SCAN,
) -> List[Room]:
    """Возвращает номера без бронирований, пересекающихся с периодом."""
    reservations = list(reservations)

    if strategy == OverlapStrategy.QUERY:
        occupied = occupied_room_numbers(period, reservations)
        return [room for room in rooms if room.number not in occupied]

    return [
        room
        for room in rooms
        if find_conflicting_reservation(room.number, period, reservations) is None
    ]
