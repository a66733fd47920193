# services/data_export.py

import json
import csv
from datetime import date
from pathlib import Path
from typing import Any, List, Optional

from ..core.models import DailyPoint, ValidationError

def backup_filename(day: date) -> str:
    return f"habitflow-backup-{day.isoformat()}.json"

def export_series_to_csv(series: List[DailyPoint], export_dir: Path, day: date) -> Optional[Path]:
    if not series:
        return None
    export_dir.mkdir(parents=True, exist_ok=True)
    filename = export_dir / f"habitflow-daily-{day.isoformat()}.csv"
    with open(filename, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, ["date", "completed", "total"])
        writer.writeheader()
        for point in series:
            writer.writerow({
                "date": point.date,
                "completed": point.completed_count,
                "total": point.total_habit_count
            })
    return filename

def parse_import_payload(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Error importing data, please check the file format: {e}")
