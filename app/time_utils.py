import calendar
from datetime import date


def months_before(day: date, months: int) -> date:
    """Same calendar day ``months`` earlier, clamped to the end of shorter months."""
    index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def format_br(day: date | None) -> str:
    return day.strftime("%d/%m/%Y") if day else ""
