"""
Общее ядро (Shared Kernel) системы бронирования отеля.

Содержит общие типы данных и утилиты, используемые контекстом бронирования.
"""

from .domain import (
    BusinessRuleValidationException,
    DateRange,
    DomainEvent,
    # Исключения
    DomainException,
    # Базовые типы
    EntityId,
    generate_id,
    # Утилиты
    now,
    today,
)

__all__ = [
    # Базовые типы
    "EntityId",
    "generate_id",
    # Основные классы
    "DateRange",
    "DomainEvent",
    # Исключения
    "DomainException",
    "BusinessRuleValidationException",
    # Утилиты
    "now",
    "today",
]
