import re
from datetime import datetime

DATE_KEY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
COLOR_TAG_RE = re.compile(r"^(bg-[a-z]+-\d{3}|#[0-9a-fA-F]{6})$")

def is_valid_date(date_str: str) -> bool:
    if not isinstance(date_str, str) or not DATE_KEY_RE.match(date_str):
        return False
    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError:
        return False
    return True

def is_valid_color(color: str) -> bool:
    return isinstance(color, str) and bool(COLOR_TAG_RE.match(color))

def is_valid_target_days(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 1 <= value <= 7
