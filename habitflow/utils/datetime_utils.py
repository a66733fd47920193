from datetime import date, datetime, timedelta
from typing import List, Tuple, Union

import pytz

DATE_KEY_FORMAT = "%Y-%m-%d"

# date.weekday(): понедельник = 0, воскресенье = 6
WEEKDAY_INDEX = {
    "monday": 0,
    "sunday": 6,
}

def now_in(tz_name: str = "UTC") -> datetime:
    return datetime.now(pytz.timezone(tz_name))

def today_in(tz_name: str = "UTC") -> date:
    return now_in(tz_name).date()

def now_iso() -> str:
    return datetime.now(pytz.utc).isoformat()

def to_date_key(day: date) -> str:
    return day.strftime(DATE_KEY_FORMAT)

def parse_date_key(date_str: str) -> date:
    return datetime.strptime(date_str, DATE_KEY_FORMAT).date()

def as_date(value: Union[date, str]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_date_key(value)

def week_bounds(day: date, week_start: str = "sunday") -> Tuple[date, date]:
    """Первый и последний день календарной недели, содержащей day"""
    offset = (day.weekday() - WEEKDAY_INDEX[week_start]) % 7
    start = day - timedelta(days=offset)
    return start, start + timedelta(days=6)

def days_back(end: date, count: int) -> List[date]:
    """count календарных дней, заканчивая end включительно, от старых к новым"""
    return [end - timedelta(days=offset) for offset in range(count - 1, -1, -1)]
