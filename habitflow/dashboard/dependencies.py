#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow - Dashboard Dependencies
Провайдеры зависимостей для FastAPI приложения
"""


from fastapi import Request

from ..core.tracker import HabitTracker
from .config import DashboardSettings


# ===== ПРОВАЙДЕРЫ ЗАВИСИМОСТЕЙ =====

def get_tracker(request: Request) -> HabitTracker:
    """Трекер, созданный при запуске приложения"""
    return request.app.state.tracker

def get_settings(request: Request) -> DashboardSettings:
    """Настройки дашборда текущего приложения"""
    return request.app.state.settings

def get_app_config(request: Request):
    """Общая конфигурация HabitFlow"""
    return request.app.state.app_config
