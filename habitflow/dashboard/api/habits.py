from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status

from ...core.tracker import HabitTracker
from ...utils.datetime_utils import to_date_key
from ..dependencies import get_tracker
from ..schemas import HabitCreate, HabitUpdate, ToggleResult

router = APIRouter(prefix="/api/habits", tags=["habits"])

@router.get("", response_model=List[Dict[str, Any]])
async def list_habits(tracker: HabitTracker = Depends(get_tracker)):
    """
    Список привычек в порядке добавления с текущими показателями
    """
    today = tracker.today()
    result = []
    for habit in tracker.list_habits():
        data = habit.to_dict()
        data["completedToday"] = tracker.is_completed(habit.id, today)
        data["streak"] = tracker.streak(habit.id, today)
        data["weeklyProgress"] = tracker.weekly_progress(habit.id, today).to_dict()
        result.append(data)
    return result

@router.post("", status_code=status.HTTP_201_CREATED, response_model=Dict[str, Any])
async def create_habit(payload: HabitCreate, tracker: HabitTracker = Depends(get_tracker)):
    habit = tracker.add_habit(payload.model_dump(mode="json", by_alias=True))
    return habit.to_dict()

@router.get("/{habit_id}", response_model=Dict[str, Any])
async def get_habit(habit_id: int, tracker: HabitTracker = Depends(get_tracker)):
    return tracker.get_habit(habit_id).to_dict()

@router.patch("/{habit_id}", response_model=Dict[str, Any])
async def update_habit(habit_id: int, payload: HabitUpdate,
                       tracker: HabitTracker = Depends(get_tracker)):
    fields = payload.model_dump(mode="json", by_alias=True, exclude_unset=True)
    return tracker.update_habit(habit_id, fields).to_dict()

@router.delete("/{habit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_habit(habit_id: int, tracker: HabitTracker = Depends(get_tracker)):
    tracker.delete_habit(habit_id)

@router.post("/{habit_id}/toggle", response_model=ToggleResult)
async def toggle_completion(
    habit_id: int,
    date: Optional[str] = Query(None, description="YYYY-MM-DD, по умолчанию сегодня"),
    tracker: HabitTracker = Depends(get_tracker)
):
    """
    Переключить отметку выполнения привычки за день
    """
    day = tracker.resolve_day(date)
    completed = tracker.toggle_completion(habit_id, day)
    return ToggleResult(habitId=habit_id, date=to_date_key(day), completed=completed)

@router.get("/{habit_id}/completed", response_model=ToggleResult)
async def is_completed(
    habit_id: int,
    date: Optional[str] = Query(None, description="YYYY-MM-DD, по умолчанию сегодня"),
    tracker: HabitTracker = Depends(get_tracker)
):
    habit = tracker.get_habit(habit_id)
    day = tracker.resolve_day(date)
    return ToggleResult(habitId=habit.id, date=to_date_key(day), completed=tracker.is_completed(habit.id, day))
