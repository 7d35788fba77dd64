"""
Инфраструктурный слой контекста бронирования.

Содержит реализации портов: логгер поверх стандартного logging,
шину событий в памяти и загрузку демонстрационных данных.
"""

import json
import logging
from datetime import timedelta
from typing import Any, Callable, Dict, List, Optional, Tuple, Type, Union

from ..shared_kernel import DomainEvent
from . import interfaces as ports
from .domain import (
    Reservation,
    ReservationCancelled,
    ReservationCreated,
    Room,
    RoomClass,
    User,
    UserRole,
)
from .registry import BookingRegistry


class StandardLogger(ports.ILogger):
    """Реализация логгера, передающая сообщения в модуль logging."""

    def __init__(self, name: str = "hotel_booking"):
        self._logger = logging.getLogger(name)

    def _log(self, level: int, message: str, kwargs: Dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if kwargs:
            context = json.dumps(kwargs, default=str, ensure_ascii=False)
            self._logger.log(level, "%s | context=%s", message, context)
        else:
            self._logger.log(level, "%s", message)

    def info(self, message: str, **kwargs) -> None:
        self._log(logging.INFO, message, kwargs)

    def error(self, message: str, **kwargs) -> None:
        self._log(logging.ERROR, message, kwargs)

    def warning(self, message: str, **kwargs) -> None:
        self._log(logging.WARNING, message, kwargs)

    def debug(self, message: str, **kwargs) -> None:
        self._log(logging.DEBUG, message, kwargs)


ReservationEvent = Union[ReservationCreated, ReservationCancelled]
ReservationEventHandler = Callable[[ReservationEvent], None]


class InMemoryEventBus(ports.IEventBus):
    """
    Синхронная шина событий бронирования.

    Принимает только ReservationCreated и ReservationCancelled.
    Обработчики вызываются в порядке подписки; исключение обработчика
    записывается в журнал и не мешает остальным.
    """

    event_types: Tuple[Type[DomainEvent], ...] = (ReservationCreated, ReservationCancelled)

    def __init__(self, logger: Optional[ports.ILogger] = None):
        self._handlers: Dict[Type[DomainEvent], List[ReservationEventHandler]] = {
            event_type: [] for event_type in self.event_types
        }
        self._logger = logger or StandardLogger()

    def _handlers_for(self, event_type: Type[DomainEvent]) -> List[ReservationEventHandler]:
        try:
            return self._handlers[event_type]
        except KeyError:
            raise ValueError(
                f"Шина не принимает события {event_type.__name__}"
            ) from None

    def subscribe(
        self, event_type: Type[DomainEvent], handler: ReservationEventHandler
    ) -> None:
        self._handlers_for(event_type).append(handler)

    def publish(self, event: ReservationEvent) -> None:
        handlers = list(self._handlers_for(type(event)))
        if not handlers:
            return

        self._logger.debug(
            f"Событие {event.event_type}",
            reservation_id=event.reservation_id,
            handlers=len(handlers),
        )
        for handler in handlers:
            try:
                handler(event)
            except Exception as e:
                self._logger.error(
                    f"Обработчик события {event.event_type} завершился с ошибкой",
                    error=str(e),
                    event=event.model_dump(mode="json"),
                )


def load_stock_data(registry: BookingRegistry) -> Dict[str, Any]:
    """
    Заполняет реестр демонстрационными данными.

    Бронирование Стивена начинается через неделю от "сегодня" реестра,
    чтобы пройти проверку на дату в прошлом.

    Returns:
        Словарь с созданными пользователями, номерами и бронированием
    """
    steve = User(name="Steven")
    ann = User(name="Ann")
    donald = User(name="Donald", role=UserRole.ADMIN)
    for user in (steve, ann, donald):
        registry.add_user(user)

    room10 = Room(number=10, room_class=RoomClass.ECONOMY)
    room11 = Room(number=11, room_class=RoomClass.LUXURY)
    room12 = Room(number=12, room_class=RoomClass.PRESIDENTIAL)
    for room in (room10, room11, room12):
        registry.add_room(room)

    check_in = registry.today() + timedelta(days=7)
    reservation = Reservation.create(
        user_id=steve.id,
        room_number=room10.number,
        check_in=check_in,
        check_out=check_in + timedelta(days=7),
    )
    registry.add_reservation(reservation)

    return {
        "users": [steve, ann, donald],
        "rooms": [room10, room11, room12],
        "reservations": [reservation],
    }
