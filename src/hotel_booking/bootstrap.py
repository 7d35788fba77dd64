from datetime import date
from functools import partial
from typing import Any, Callable, Dict, Optional

from .booking import interfaces as ports
from .booking.application import (
    ReservationApplicationService,
    RoomApplicationService,
    UserApplicationService,
)
from .booking.config import BookingSettings
from .booking.domain import ReservationCancelled, ReservationCreated
from .booking.infrastructure import InMemoryEventBus, StandardLogger, load_stock_data
from .booking.registry import BookingRegistry


def audit_reservation_event(event, logger: ports.ILogger) -> None:
    """Записывает в журнал допуск и отмену бронирований."""
    logger.info(
        f"Аудит: {event.event_type}",
        reservation_id=event.reservation_id,
        room_number=event.room_number,
    )


def bootstrap_app(
    settings: Optional[BookingSettings] = None,
    clock: Optional[Callable[[], date]] = None,
    logger: Optional[ports.ILogger] = None,
    load_stock: bool = False,
) -> Dict[str, Any]:
    """Создает и настраивает все компоненты приложения."""
    # 1. Настройки и логгер
    settings = settings or BookingSettings.from_env()
    logger = logger or StandardLogger()

    # 2. Единственный реестр, который передается всем сервисам
    registry = BookingRegistry(settings=settings, clock=clock, logger=logger)
    event_bus = InMemoryEventBus(logger=logger)

    # 3. Подписываем обработчики на события
    handler = partial(audit_reservation_event, logger=logger)
    event_bus.subscribe(ReservationCreated, handler)
    event_bus.subscribe(ReservationCancelled, handler)

    if load_stock:
        load_stock_data(registry)

    services = dict(registry=registry, event_bus=event_bus, logger=logger)
    return {
        "settings": settings,
        "registry": registry,
        "event_bus": event_bus,
        "user_service": UserApplicationService(**services),
        "room_service": RoomApplicationService(**services),
        "reservation_service": ReservationApplicationService(**services),
    }
