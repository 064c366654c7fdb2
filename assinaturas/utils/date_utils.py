# assinaturas/utils/date_utils.py
import calendar
import datetime
from typing import Union

DateLike = Union[datetime.date, datetime.datetime, str]


class InvalidDateError(ValueError):
    """Data ausente, malformada ou de um tipo que não representa uma data."""


def to_date(value: DateLike) -> datetime.date:
    """Converte o valor para ``datetime.date`` (sem hora).

    Aceita ``date``, ``datetime`` (a hora é descartada) ou uma string ISO
    (``YYYY-MM-DD`` ou um timestamp ISO completo, do qual só a data é usada).
    Qualquer outra coisa levanta ``InvalidDateError``; não há valor padrão.
    """
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    if isinstance(value, str):
        raw = value.strip()
        try:
            if len(raw) == 10:
                return datetime.date.fromisoformat(raw)
            # Supabase devolve timestamps como "2024-01-31T00:00:00+00:00"
            return datetime.datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        except ValueError as e:
            raise InvalidDateError(f"Data inválida: {value!r}") from e
    raise InvalidDateError(f"Data inválida: {value!r}")


def today() -> datetime.date:
    return datetime.date.today()


def days_in_month(d: datetime.date) -> int:
    return calendar.monthrange(d.year, d.month)[1]


def days_in_year(d: datetime.date) -> int:
    return 366 if calendar.isleap(d.year) else 365


def add_months(d: datetime.date, months: int) -> datetime.date:
    """Soma meses de calendário, mantendo o dia quando possível.

    Quando o dia não existe no mês de destino, usa o último dia do mês
    (31/01 + 1 mês -> 28/02 ou 29/02).
    """
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return datetime.date(year, month, min(d.day, last_day))


def add_years(d: datetime.date, years: int) -> datetime.date:
    return add_months(d, 12 * years)


def months_between(start: datetime.date, end: datetime.date) -> int:
    """Diferença em meses de calendário, ignorando o dia."""
    return (end.year - start.year) * 12 + (end.month - start.month)
