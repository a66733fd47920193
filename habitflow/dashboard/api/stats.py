from fastapi import APIRouter, Depends, Query
from typing import Any, Dict, Optional

from ...core.tracker import HabitTracker
from ...utils.datetime_utils import to_date_key
from ..dependencies import get_tracker

router = APIRouter(prefix="/api/stats", tags=["statistics"])

@router.get("/overview", response_model=Dict[str, Any])
async def get_overview_stats(
    as_of: Optional[str] = Query(None, alias="date"),
    tracker: HabitTracker = Depends(get_tracker)
):
    """
    Общая статистика для главной страницы и страницы статистики
    """
    day = tracker.resolve_day(as_of)
    overview = tracker.overview(day).to_dict()
    overview["date"] = to_date_key(day)
    return overview

@router.get("/habits", response_model=Dict[str, Any])
async def get_habits_stats(
    as_of: Optional[str] = Query(None, alias="date"),
    tracker: HabitTracker = Depends(get_tracker)
):
    """
    Сводка по каждой привычке: серия, лучшая серия, неделя, всего выполнений
    """
    day = tracker.resolve_day(as_of)
    summaries = [tracker.habit_summary(habit.id, day).to_dict() for habit in tracker.list_habits()]
    return {"date": to_date_key(day), "habits": summaries}

@router.get("/habits/{habit_id}", response_model=Dict[str, Any])
async def get_habit_stats(
    habit_id: int,
    as_of: Optional[str] = Query(None, alias="date"),
    tracker: HabitTracker = Depends(get_tracker)
):
    return tracker.habit_summary(habit_id, tracker.resolve_day(as_of)).to_dict()

@router.get("/categories", response_model=Dict[str, int])
async def get_category_stats(tracker: HabitTracker = Depends(get_tracker)):
    """
    Количество привычек по категориям
    """
    return tracker.statistics.category_breakdown()
