#!/usr/bin/env python3
"""
Charts API для HabitFlow Dashboard
Данные для графика выполнений и недельного прогресса по привычкам
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ...core.tracker import HabitTracker
from ...utils.datetime_utils import parse_date_key, to_date_key
from ...utils.validators import is_valid_color
from ..config import DashboardSettings
from ..dependencies import get_app_config, get_settings, get_tracker


router = APIRouter(prefix="/api/charts", tags=["charts"])

# Цвета тегов интерфейса для столбцов графика
COLOR_HEX = {
    "blue": "#3b82f6",
    "green": "#10b981",
    "red": "#ef4444",
    "purple": "#8b5cf6",
    "pink": "#ec4899",
    "yellow": "#f59e0b",
    "indigo": "#6366f1",
    "teal": "#14b8a6",
}
FALLBACK_HEX = "#6b7280"

def color_to_hex(color: str) -> str:
    """Преобразовать тег вида bg-blue-500 в HEX цвет"""
    if not is_valid_color(color):
        return FALLBACK_HEX
    if color.startswith("#"):
        return color
    name = color.replace("bg-", "").rsplit("-", 1)[0]
    return COLOR_HEX.get(name, FALLBACK_HEX)

@router.get("/daily", response_model=Dict[str, Any])
async def get_daily_chart(
    days: Optional[int] = Query(None, ge=1),
    as_of: Optional[str] = Query(None, alias="date"),
    tracker: HabitTracker = Depends(get_tracker),
    settings: DashboardSettings = Depends(get_settings),
    app_config=Depends(get_app_config)
):
    """
    Ряд выполнений за последние N дней, от старых к новым
    """
    window = days or app_config.tracker.stats_window_days
    if window > settings.MAX_CHART_DAYS:
        raise HTTPException(status_code=400, detail=f"Период не может превышать {settings.MAX_CHART_DAYS} дней")

    day = tracker.resolve_day(as_of)
    series = tracker.daily_series(window, day)

    return {
        "period": {
            "days": window,
            "start_date": series[0].date,
            "end_date": to_date_key(day)
        },
        "labels": [parse_date_key(point.date).strftime("%b %d") for point in series],
        "series": [point.to_dict() for point in series]
    }

@router.get("/weekly-progress", response_model=Dict[str, Any])
async def get_weekly_progress_chart(
    as_of: Optional[str] = Query(None, alias="date"),
    tracker: HabitTracker = Depends(get_tracker)
):
    """
    Недельный прогресс по каждой привычке для горизонтального столбчатого графика
    """
    day = tracker.resolve_day(as_of)
    bars = []
    for habit in tracker.list_habits():
        progress = tracker.weekly_progress(habit.id, day)
        bars.append({
            "habitId": habit.id,
            "name": habit.name,
            "value": progress.percentage,
            "color": color_to_hex(habit.color)
        })
    return {"date": to_date_key(day), "max": 100, "bars": bars}
