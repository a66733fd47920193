import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import FileResponse, JSONResponse

from ...core.tracker import HabitTracker
from ...services.data_export import backup_filename, export_series_to_csv, parse_import_payload
from ..dependencies import get_app_config, get_tracker
from ..schemas import Preferences

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])

@router.get("/export")
async def export_data(tracker: HabitTracker = Depends(get_tracker)):
    """
    Выгрузка всех данных в JSON файл резервной копии
    """
    snapshot = tracker.export_snapshot()
    filename = backup_filename(tracker.today())
    return JSONResponse(
        content=snapshot,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )

@router.get("/export/csv")
async def export_daily_csv(
    tracker: HabitTracker = Depends(get_tracker),
    app_config=Depends(get_app_config)
):
    """
    Выгрузка дневного ряда в CSV
    """
    today = tracker.today()
    series = tracker.daily_series(app_config.tracker.stats_window_days, today)
    path = export_series_to_csv(series, app_config.export_dir, today)
    return FileResponse(path, media_type="text/csv", filename=path.name)

@router.post("/import", response_model=Dict[str, Any])
async def import_data(request: Request, tracker: HabitTracker = Depends(get_tracker)):
    """
    Загрузка резервной копии: документ должен содержать habits и completions
    """
    raw = await request.body()
    data = parse_import_payload(raw.decode("utf-8", errors="replace"))
    result = tracker.import_snapshot(data)
    logger.info(f"Data imported: {result}")
    return {"status": "imported", **result}

@router.post("/clear", response_model=Dict[str, Any])
async def clear_data(tracker: HabitTracker = Depends(get_tracker)):
    tracker.clear_all_data()
    return {"status": "cleared"}

@router.get("/preferences", response_model=Dict[str, Any])
async def get_preferences(tracker: HabitTracker = Depends(get_tracker)):
    """
    Косметические настройки (уведомления и тёмная тема), без планирования
    """
    return tracker.storage.load_preferences()

@router.patch("/preferences", response_model=Dict[str, Any])
async def update_preferences(payload: Preferences, tracker: HabitTracker = Depends(get_tracker)):
    preferences = tracker.storage.load_preferences()
    preferences.update(payload.model_dump(exclude_none=True))
    tracker.storage.save_preferences(preferences)
    return preferences
