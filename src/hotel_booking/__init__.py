"""
Система бронирования номеров отеля.
"""

from .booking.config import BookingSettings, OverlapStrategy
from .booking.registry import BookingRegistry
from .bootstrap import bootstrap_app

__all__ = [
    "BookingRegistry",
    "BookingSettings",
    "OverlapStrategy",
    "bootstrap_app",
]
