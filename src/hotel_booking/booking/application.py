"""
Прикладной слой контекста бронирования.

Содержит сервисы приложения, которые координируют
взаимодействие между внешними интерфейсами и реестром бронирований.
"""

from contextlib import contextmanager
from datetime import date
from typing import Iterator, List, Optional

from pydantic import BaseModel, Field, ValidationError

from ..shared_kernel import DateRange, DomainException, EntityId
from . import interfaces as ports
from .domain import (
    InternalError,
    InvalidInterval,
    Reservation,
    ReservationCancelled,
    ReservationCreated,
    Room,
    RoomClass,
    RoomNotFound,
    User,
    UserNotFound,
    UserRole,
)
from .infrastructure import StandardLogger
from .registry import BookingRegistry

# DTO (Data Transfer Objects) для входящих данных


class RegisterUserRequest(BaseModel):
    """Запрос на регистрацию пользователя."""

    name: str = Field(..., min_length=1)
    role: UserRole = UserRole.GUEST


class UpdateUserNameRequest(BaseModel):
    """Запрос на изменение имени пользователя."""

    user_id: EntityId
    name: str = Field(..., min_length=1)


class RegisterRoomRequest(BaseModel):
    """Запрос на регистрацию номера."""

    number: int = Field(..., gt=0)
    room_class: RoomClass


class CreateReservationRequest(BaseModel):
    """
    Запрос на создание бронирования.

    Порядок дат здесь не проверяется: об ошибке сообщает реестр.
    """

    user_id: EntityId
    room_number: int
    check_in: date
    check_out: date


# DTO для исходящих данных


class UserDTO(BaseModel):
    """DTO для представления пользователя."""

    id: EntityId
    name: str
    role: UserRole
    is_admin: bool

    @classmethod
    def from_domain(cls, user: User) -> "UserDTO":
        """Создает DTO из доменной модели."""
        return cls(id=user.id, name=user.name, role=user.role, is_admin=user.is_admin)


class RoomDTO(BaseModel):
    """DTO для представления номера."""

    number: int
    room_class: RoomClass

    @classmethod
    def from_domain(cls, room: Room) -> "RoomDTO":
        """Создает DTO из доменной модели."""
        return cls(number=room.number, room_class=room.room_class)


class ReservationDTO(BaseModel):
    """DTO для представления бронирования."""

    id: EntityId
    user_id: EntityId
    room_number: int
    check_in: date
    check_out: date
    created_at: str

    @classmethod
    def from_domain(cls, reservation: Reservation) -> "ReservationDTO":
        """Создает DTO из доменной модели."""
        return cls(
            id=reservation.id,
            user_id=reservation.user_id,
            room_number=reservation.room_number,
            check_in=reservation.check_in,
            check_out=reservation.check_out,
            created_at=reservation.created_at.isoformat(),
        )


# Сервисы приложения


class _ApplicationService:
    def __init__(
        self,
        registry: BookingRegistry,
        event_bus: Optional[ports.IEventBus] = None,
        logger: Optional[ports.ILogger] = None,
    ):
        """Инициализирует сервис."""
        self._registry = registry
        self._event_bus = event_bus
        self._logger = logger or StandardLogger()

    @property
    def registry(self) -> BookingRegistry:
        return self._registry

    @contextmanager
    def _operation(self, name: str) -> Iterator[None]:
        """Логирует отказы и оборачивает непредвиденные сбои в InternalError."""
        try:
            yield
        except DomainException as e:
            context = e.context() if hasattr(e, "context") else {}
            self._logger.warning(
                f"Операция '{name}' отклонена: {e}",
                error=type(e).__name__,
                **context,
            )
            raise
        except ValidationError as e:
            self._logger.warning(
                f"Операция '{name}' отклонена: некорректные данные",
                errors=e.errors(include_url=False),
            )
            raise
        except Exception as e:
            self._logger.error(
                f"Непредвиденная ошибка в операции '{name}'",
                error=repr(e),
            )
            raise InternalError(name) from e

    def _publish(self, event) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event)


class UserApplicationService(_ApplicationService):
    """Сервис приложения для работы с пользователями."""

    def register_user(self, request: RegisterUserRequest) -> UserDTO:
        """Регистрирует нового пользователя."""
        with self._operation("register_user"):
            user = User(name=request.name, role=request.role)
            self._registry.add_user(user)
        self._logger.info("Пользователь зарегистрирован", user_id=user.id)
        return UserDTO.from_domain(user)

    def list_users(self) -> List[UserDTO]:
        """Возвращает список пользователей."""
        return [UserDTO.from_domain(user) for user in self._registry.users]

    def get_user(self, user_id: EntityId) -> UserDTO:
        """Возвращает информацию о пользователе."""
        with self._operation("get_user"):
            user = self._registry.get_user(user_id)
            if user is None:
                raise UserNotFound(user_id)
        return UserDTO.from_domain(user)

    def update_user_name(self, request: UpdateUserNameRequest) -> UserDTO:
        """Изменяет имя пользователя."""
        with self._operation("update_user_name"):
            user = self._registry.rename_user(request.user_id, request.name)
        return UserDTO.from_domain(user)

    def delete_user(self, user_id: EntityId) -> None:
        """
        Удаляет пользователя.

        Удаление отсутствующего пользователя ничего не делает.
        Бронирования пользователя остаются в реестре.
        """
        with self._operation("delete_user"):
            user = self._registry.get_user(user_id)
            if user is not None:
                self._registry.delete_user(user)


class RoomApplicationService(_ApplicationService):
    """Сервис приложения для работы с номерами."""

    def register_room(self, request: RegisterRoomRequest) -> RoomDTO:
        """Регистрирует новый номер."""
        with self._operation("register_room"):
            room = Room(number=request.number, room_class=request.room_class)
            self._registry.add_room(room)
        self._logger.info("Номер зарегистрирован", room_number=room.number)
        return RoomDTO.from_domain(room)

    def list_rooms(self) -> List[RoomDTO]:
        """Возвращает список номеров."""
        return [RoomDTO.from_domain(room) for room in self._registry.rooms]

    def get_room(self, room_number: int) -> RoomDTO:
        """Возвращает информацию о номере."""
        with self._operation("get_room"):
            room = self._registry.get_room(room_number)
            if room is None:
                raise RoomNotFound(room_number)
        return RoomDTO.from_domain(room)

    def delete_room(self, room_number: int) -> None:
        """Удаляет номер. Удаление отсутствующего номера ничего не делает."""
        with self._operation("delete_room"):
            room = self._registry.get_room(room_number)
            if room is not None:
                self._registry.delete_room(room)

    def list_available_rooms(self, check_in: date, check_out: date) -> List[RoomDTO]:
        """Возвращает номера, свободные в периоде [check_in, check_out)."""
        with self._operation("list_available_rooms"):
            period = DateRange(check_in=check_in, check_out=check_out)
            if period.is_inverted:
                raise InvalidInterval(period)
            rooms = self._registry.find_available_rooms(period)
        return [RoomDTO.from_domain(room) for room in rooms]


class ReservationApplicationService(_ApplicationService):
    """Сервис приложения для работы с бронированиями."""

    def create_reservation(self, request: CreateReservationRequest) -> ReservationDTO:
        """Создает новое бронирование."""
        with self._operation("create_reservation"):
            reservation = Reservation.create(
                user_id=request.user_id,
                room_number=request.room_number,
                check_in=request.check_in,
                check_out=request.check_out,
            )
            self._registry.add_reservation(reservation)

        self._logger.info(
            "Бронирование создано",
            reservation_id=reservation.id,
            room_number=reservation.room_number,
        )
        self._publish(
            ReservationCreated(
                reservation_id=reservation.id,
                user_id=reservation.user_id,
                room_number=reservation.room_number,
                period=reservation.period,
            )
        )
        return ReservationDTO.from_domain(reservation)

    def list_reservations(self) -> List[ReservationDTO]:
        """Возвращает список всех бронирований."""
        return [
            ReservationDTO.from_domain(reservation)
            for reservation in self._registry.reservations
        ]

    def get_user_reservations(self, user_id: EntityId) -> List[ReservationDTO]:
        """
        Возвращает бронирования пользователя.

        Бронирования удаленного пользователя тоже возвращаются.
        """
        reservations = self._registry.find_reservations_by_user(user_id)
        return [ReservationDTO.from_domain(r) for r in reservations]

    def cancel_reservation(self, reservation_id: EntityId) -> ReservationDTO:
        """Отменяет бронирование."""
        with self._operation("cancel_reservation"):
            reservation = self._registry.cancel_reservation(reservation_id)

        self._logger.info("Бронирование отменено", reservation_id=reservation.id)
        self._publish(
            ReservationCancelled(
                reservation_id=reservation.id, room_number=reservation.room_number
            )
        )
        return ReservationDTO.from_domain(reservation)
