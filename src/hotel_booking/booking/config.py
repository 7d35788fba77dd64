"""
Настройки политики бронирования.
"""

import os
from enum import Enum
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict

ENV_PREFIX = "HOTEL_BOOKING_"


class OverlapStrategy(str, Enum):
    """Способ поиска пересекающихся бронирований."""

    SCAN = "scan"  # полный перебор бронирований номера
    QUERY = "query"  # множество занятых номеров, как в запросе к хранилищу


class BookingSettings(BaseModel):
    """Политики допуска бронирований."""

    model_config = ConfigDict(frozen=True)

    reject_past_dates: bool = True
    overlap_strategy: OverlapStrategy = OverlapStrategy.SCAN

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BookingSettings":
        """
        Читает настройки из переменных окружения.

        Args:
            environ: Источник переменных, по умолчанию os.environ

        Raises:
            pydantic.ValidationError: если значение переменной некорректно
        """
        environ = os.environ if environ is None else environ
        values = {}
        for field_name in cls.model_fields:
            raw = environ.get(ENV_PREFIX + field_name.upper())
            if raw not in (None, ""):
                values[field_name] = raw.strip().lower()
        return cls.model_validate(values)
