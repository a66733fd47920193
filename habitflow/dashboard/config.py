#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow - Dashboard Configuration
Конфигурация локального веб-дашборда

Версия: 1.0.0
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class DashboardSettings(BaseSettings):
    """Настройки веб-дашборда HabitFlow"""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_", env_file=".env", extra="ignore")

    # ===== ОСНОВНЫЕ НАСТРОЙКИ =====

    APP_NAME: str = Field(
        default="HabitFlow Dashboard",
        description="Название приложения"
    )

    VERSION: str = Field(
        default="1.0.0",
        description="Версия дашборда"
    )

    DEBUG: bool = Field(
        default=False,
        description="Режим отладки (включает /api/docs)"
    )

    # ===== CORS НАСТРОЙКИ =====

    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://127.0.0.1:3000"],
        description="Разрешенные источники для CORS"
    )

    # ===== ГРАФИКИ =====

    MAX_CHART_DAYS: int = Field(
        default=365,
        description="Максимальный период графика, дней"
    )

    @field_validator("MAX_CHART_DAYS")
    @classmethod
    def validate_days(cls, v):
        if v < 1:
            raise ValueError('Период графика должен быть положительным')
        return v

settings = DashboardSettings()
