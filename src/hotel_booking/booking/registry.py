"""
Реестр бронирований.

Единственная точка входа, через которую пользователи, номера и
бронирования попадают в систему и покидают ее. Все проверки инвариантов
выполняются здесь, под одной блокировкой экземпляра реестра.
"""

import threading
from datetime import date
from typing import Any, Callable, Dict, List, Optional, Tuple
from uuid import UUID

from ..shared_kernel import DateRange, EntityId, today
from . import interfaces as ports
from .availability import (
    find_available_rooms,
    find_conflicting_reservation,
    occupied_rooms,
)
from .config import BookingSettings, OverlapStrategy
from .domain import (
    DuplicateRoom,
    InvalidInterval,
    PastDate,
    Reservation,
    ReservationNotFoundForCancellation,
    Room,
    RoomNotFound,
    RoomOccupied,
    User,
    UserNotFound,
)


def _as_uuid(value: Any) -> Optional[UUID]:
    if isinstance(value, UUID):
        return value
    if not value or not isinstance(value, str):
        return None
    try:
        return UUID(value)
    except ValueError:
        return None


def _as_room_number(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    # int() принимает не все символы, для которых isdigit() истинно ("²")
    if not (text.isascii() and text.isdigit()):
        return None
    return int(text)


class BookingRegistry:
    """
    Реестр пользователей, номеров и бронирований.

    Экземпляр создается явно и передается вызывающим сторонам.
    Удаление пользователя или номера не затрагивает бронирования,
    которые на них ссылаются.
    """

    def __init__(
        self,
        settings: Optional[BookingSettings] = None,
        clock: Optional[Callable[[], date]] = None,
        logger: Optional[ports.ILogger] = None,
    ):
        self._settings = settings or BookingSettings()
        self._clock = clock or today
        self._logger = logger
        self._lock = threading.RLock()
        self._users: Dict[EntityId, User] = {}
        self._rooms: Dict[int, Room] = {}
        self._reservations: Dict[EntityId, Reservation] = {}

    @property
    def settings(self) -> BookingSettings:
        return self._settings

    def today(self) -> date:
        return self._clock()

    # --- Снимки коллекций ---

    @property
    def users(self) -> Tuple[User, ...]:
        with self._lock:
            return tuple(self._users.values())

    @property
    def rooms(self) -> Tuple[Room, ...]:
        with self._lock:
            return tuple(self._rooms.values())

    @property
    def reservations(self) -> Tuple[Reservation, ...]:
        with self._lock:
            return tuple(self._reservations.values())

    # --- Пользователи ---

    def add_user(self, user: User) -> None:
        """Добавляет пользователя. Запись с тем же id заменяется."""
        with self._lock:
            self._users[user.id] = user
        self._debug("Пользователь добавлен", user_id=user.id)

    def rename_user(self, user_id: EntityId, name: str) -> User:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                raise UserNotFound(user_id)
            renamed = user.renamed(name)
            self._users[user_id] = renamed
        self._debug("Пользователь переименован", user_id=user_id)
        return renamed

    def delete_user(self, user: User) -> None:
        with self._lock:
            removed = self._users.pop(user.id, None)
        if removed is not None:
            self._debug("Пользователь удален", user_id=user.id)

    def get_user(self, user_id: Any) -> Optional[User]:
        key = _as_uuid(user_id)
        with self._lock:
            return self._users.get(key) if key is not None else None

    def contains_user_with_id(self, user_id: Any) -> bool:
        return self.get_user(user_id) is not None

    # --- Номера ---

    def add_room(self, room: Room) -> None:
        with self._lock:
            if room.number in self._rooms:
                raise DuplicateRoom(room.number)
            self._rooms[room.number] = room
        self._debug("Номер добавлен", room_number=room.number)

    def delete_room(self, room: Room) -> None:
        with self._lock:
            removed = self._rooms.pop(room.number, None)
        if removed is not None:
            self._debug("Номер удален", room_number=room.number)

    def get_room(self, room_number: Any) -> Optional[Room]:
        key = _as_room_number(room_number)
        with self._lock:
            return self._rooms.get(key) if key is not None else None

    def contains_room_with_id(self, room_number: Any) -> bool:
        return self.get_room(room_number) is not None

    # --- Бронирования ---

    def add_reservation(self, reservation: Reservation) -> None:
        """
        Допускает бронирование в реестр.

        Проверки выполняются строго по порядку, первая неудачная
        прерывает допуск:

        1. UserNotFound - пользователь не зарегистрирован
        2. RoomNotFound - номер не зарегистрирован
        3. InvalidInterval - дата заезда позже даты выезда
        4. PastDate - дата заезда в прошлом (если включено в настройках)
        5. RoomOccupied - период пересекается с другим бронированием номера
        """
        period = reservation.period
        with self._lock:
            if reservation.user_id not in self._users:
                raise UserNotFound(reservation.user_id)
            if reservation.room_number not in self._rooms:
                raise RoomNotFound(reservation.room_number)
            if period.is_inverted:
                raise InvalidInterval(period)
            if self._settings.reject_past_dates:
                current = self._clock()
                if period.check_in < current:
                    raise PastDate(period, current)

            conflict = self._find_conflict(reservation.room_number, period)
            if conflict is not None:
                raise RoomOccupied(reservation.room_number, period, conflict)

            self._reservations[reservation.id] = reservation

        self._debug(
            "Бронирование допущено",
            reservation_id=reservation.id,
            room_number=reservation.room_number,
            period=str(period),
        )

    def delete_reservation(self, reservation: Reservation) -> None:
        with self._lock:
            removed = self._reservations.pop(reservation.id, None)
        if removed is not None:
            self._debug("Бронирование удалено", reservation_id=reservation.id)

    def cancel_reservation(self, reservation_id: Any) -> Reservation:
        """Удаляет бронирование по ID, отсутствие бронирования - ошибка."""
        key = _as_uuid(reservation_id)
        with self._lock:
            reservation = (
                self._reservations.pop(key, None) if key is not None else None
            )
        if reservation is None:
            raise ReservationNotFoundForCancellation(reservation_id)
        self._debug("Бронирование отменено", reservation_id=reservation.id)
        return reservation

    def get_reservation(self, reservation_id: Any) -> Optional[Reservation]:
        key = _as_uuid(reservation_id)
        with self._lock:
            return self._reservations.get(key) if key is not None else None

    def contains_reservation_with_id(self, reservation_id: Any) -> bool:
        return self.get_reservation(reservation_id) is not None

    def find_reservations_by_user(self, user_id: Any) -> List[Reservation]:
        key = _as_uuid(user_id)
        with self._lock:
            return [r for r in self._reservations.values() if r.user_id == key]

    # --- Доступность ---

    def is_room_occupied(self, room_number: int, period: DateRange) -> bool:
        with self._lock:
            return self._find_conflict(room_number, period) is not None

    def find_available_rooms(self, period: DateRange) -> List[Room]:
        with self._lock:
            rooms = list(self._rooms.values())
            reservations = list(self._reservations.values())
        return find_available_rooms(
            rooms, reservations, period, self._settings.overlap_strategy
        )

    def _find_conflict(
        self, room_number: int, period: DateRange
    ) -> Optional[EntityId]:
        # Вызывается под блокировкой
        reservations = self._reservations.values()
        if self._settings.overlap_strategy == OverlapStrategy.QUERY:
            conflict = occupied_rooms(period, reservations).get(room_number)
        else:
            conflict = find_conflicting_reservation(room_number, period, reservations)
        return conflict.id if conflict is not None else None

    def _debug(self, message: str, **kwargs: Any) -> None:
        if self._logger is not None:
            self._logger.debug(message, **kwargs)
