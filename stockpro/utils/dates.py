"""
StockPro - Date helpers
"""
from datetime import date, datetime, time
from typing import Tuple


def day_bounds(day: date) -> Tuple[datetime, datetime]:
    """Inicio e fim (inclusive) de um dia"""
    return datetime.combine(day, time.min), datetime.combine(day, time.max)


def month_start(day: date) -> datetime:
    return datetime.combine(day.replace(day=1), time.min)

