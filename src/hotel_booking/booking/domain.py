"""
Доменная модель контекста бронирования.

Содержит сущности (гость, номер, бронирование), перечисления,
доменные события и таксономию ошибок допуска бронирования.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..shared_kernel import (
    BusinessRuleValidationException,
    DateRange,
    DomainEvent,
    EntityId,
    generate_id,
    now,
)


class UserRole(str, Enum):
    """Роли пользователей."""

    GUEST = "guest"
    ADMIN = "admin"


class RoomClass(str, Enum):
    """Классы номеров в отеле."""

    ECONOMY = "economy"
    LUXURY = "luxury"
    PRESIDENTIAL = "presidential"


class User(BaseModel):
    """Пользователь (гость или администратор)."""

    model_config = ConfigDict(frozen=True)

    id: EntityId = Field(default_factory=generate_id)
    name: str = Field(..., min_length=1)
    role: UserRole = UserRole.GUEST

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Имя пользователя не может быть пустым")
        return v

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def renamed(self, name: str) -> "User":
        """Возвращает копию пользователя с новым именем."""
        return User(id=self.id, name=name, role=self.role)


class Room(BaseModel):
    """Номер в отеле. Номер комнаты - естественный ключ."""

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., gt=0)
    room_class: RoomClass


class Reservation(BaseModel):
    """Бронирование номера. После создания не изменяется."""

    model_config = ConfigDict(frozen=True)

    id: EntityId = Field(default_factory=generate_id)
    user_id: EntityId
    room_number: int
    period: DateRange
    created_at: datetime = Field(default_factory=now)

    @classmethod
    def create(
        cls, user_id: EntityId, room_number: int, check_in: date, check_out: date
    ) -> "Reservation":
        """Создает бронирование-кандидата для последующего допуска в реестр."""
        return cls(
            user_id=user_id,
            room_number=room_number,
            period=DateRange(check_in=check_in, check_out=check_out),
        )

    @property
    def check_in(self) -> date:
        return self.period.check_in

    @property
    def check_out(self) -> date:
        return self.period.check_out


# Доменные события


class ReservationCreated(DomainEvent):
    """Событие допуска бронирования в реестр."""

    reservation_id: EntityId
    user_id: EntityId
    room_number: int
    period: DateRange


class ReservationCancelled(DomainEvent):
    """Событие отмены бронирования."""

    reservation_id: EntityId
    room_number: int


# Ошибки бронирования


class BookingError(BusinessRuleValidationException):
    """Базовое исключение отказа в операции над реестром."""

    def context(self) -> dict:
        """Структурированный контекст ошибки для логов и ответов."""
        return {
            key: value
            for key, value in vars(self).items()
            if not key.startswith("_")
        }


class UserNotFound(BookingError):
    def __init__(self, user_id: Any):
        super().__init__(f"Пользователь с ID {user_id} не найден")
        self.user_id = user_id


class RoomNotFound(BookingError):
    def __init__(self, room_number: Any):
        super().__init__(f"Номер {room_number} не найден")
        self.room_number = room_number


class ReservationNotFoundForCancellation(BookingError):
    def __init__(self, reservation_id: Any):
        super().__init__(
            f"Бронирование с ID {reservation_id} не найдено, отмена невозможна"
        )
        self.reservation_id = reservation_id


class DuplicateRoom(BookingError):
    def __init__(self, room_number: int):
        super().__init__(f"Номер {room_number} уже существует")
        self.room_number = room_number


class InvalidInterval(BookingError):
    def __init__(self, period: DateRange):
        super().__init__(
            f"Дата заезда {period.check_in} не может быть позже "
            f"даты выезда {period.check_out}"
        )
        self.period = period


class PastDate(BookingError):
    def __init__(self, period: DateRange, today: date):
        super().__init__(
            f"Дата заезда {period.check_in} не может быть в прошлом "
            f"(сегодня {today})"
        )
        self.period = period
        self.today = today


class RoomOccupied(BookingError):
    def __init__(
        self,
        room_number: int,
        period: DateRange,
        conflicting_reservation_id: Optional[EntityId] = None,
    ):
        super().__init__(f"Номер {room_number} уже занят в период {period}")
        self.room_number = room_number
        self.period = period
        self.conflicting_reservation_id = conflicting_reservation_id


class InternalError(Exception):
    """
    Непредвиденный внутренний сбой.

    Не является доменной ошибкой: оборачивает исключения, которые
    не относятся к правилам бронирования.
    """

    def __init__(self, operation: str):
        super().__init__(f"Внутренняя ошибка при выполнении операции '{operation}'")
        self.operation = operation
