"""
Модуль контекста бронирования (Booking Context).

Отвечает за учет гостей, номеров и бронирований, включая:
- Допуск бронирований с проверкой ссылок и пересечений
- Проверку доступности номеров
- Отмену бронирований
"""

from . import application, availability, config, domain, infrastructure, registry

__all__ = [
    "application",
    "availability",
    "config",
    "domain",
    "infrastructure",
    "registry",
]
