"""
Основные доменные типы и утилиты общего ядра.
"""

from datetime import date, datetime, timedelta, timezone
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

# Общие типы идентификаторов
EntityId = UUID


def generate_id() -> UUID:
    """Генерирует новый UUID."""
    return uuid4()


class DateRange(BaseModel):
    """
    Полуоткрытый диапазон дат [check_in, check_out).

    Дата заезда входит в диапазон, дата выезда - нет, поэтому выезд и
    заезд в один день не считаются пересечением. Диапазон с
    check_in == check_out занимает ровно один день check_in.

    Порядок дат здесь намеренно не проверяется: реестр бронирований
    сообщает о перевернутом интервале только после проверок ссылок.
    """

    model_config = ConfigDict(frozen=True)

    check_in: date
    check_out: date

    @property
    def is_inverted(self) -> bool:
        """Дата заезда позже даты выезда."""
        return self.check_in > self.check_out

    @property
    def nights(self) -> int:
        """Количество ночей в бронировании."""
        return (self.check_out - self.check_in).days

    @property
    def occupied_until(self) -> date:
        """Первый день, который диапазон уже не занимает."""
        return max(self.check_out, self.check_in + timedelta(days=1))

    def overlaps(self, other: "DateRange") -> bool:
        """Проверяет, есть ли у двух диапазонов хотя бы один общий день."""
        return (
            self.check_in < other.occupied_until
            and other.check_in < self.occupied_until
        )

    def __str__(self) -> str:
        return f"[{self.check_in.isoformat()}, {self.check_out.isoformat()})"


class DomainEvent(BaseModel):
    """Базовый класс для всех доменных событий."""

    model_config = ConfigDict(frozen=True)

    event_id: UUID = Field(default_factory=uuid4)
    occurred_on: datetime = Field(default_factory=lambda: now())

    @property
    def event_type(self) -> str:
        return type(self).__name__


# Общие исключения
class DomainException(Exception):
    """Базовое исключение для доменных ошибок."""

    pass


class BusinessRuleValidationException(DomainException):
    """Исключение при нарушении бизнес-правил."""

    pass


# Общие утилиты
def now() -> datetime:
    """Возвращает текущую дату и время (UTC)."""
    return datetime.now(timezone.utc)


def today() -> date:
    """Возвращает текущую дату."""
    return date.today()
