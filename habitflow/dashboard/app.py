#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HabitFlow Web Dashboard - FastAPI Application
Локальный JSON API для экранов трекера: главная, привычки, статистика, настройки

Версия: 1.0.0
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from ..config import HabitFlowConfig, config as default_config
from ..core.models import NotFoundError, StorageError, ValidationError
from ..core.tracker import HabitTracker
from .config import DashboardSettings, settings as default_settings
from .schemas import HealthCheck
from .api import charts, habits, settings as settings_api, stats

logger = logging.getLogger(__name__)

def create_app(tracker: Optional[HabitTracker] = None,
               app_config: Optional[HabitFlowConfig] = None,
               settings: Optional[DashboardSettings] = None) -> FastAPI:
    """Создание FastAPI приложения с собственным экземпляром трекера"""
    app_config = app_config or default_config
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Управление жизненным циклом приложения"""
        logger.info("🚀 Запуск HabitFlow Dashboard...")
        app.state.started_at = time.time()

        if app.state.tracker is None:
            app_config.ensure_directories()
            app.state.tracker = HabitTracker.from_config(app_config)

        logger.info(f"📊 Загружено привычек: {len(app.state.tracker.list_habits())}")
        logger.info("✅ Dashboard готов к работе")

        yield

        logger.info("🛑 Остановка Dashboard...")

    app = FastAPI(
        title=settings.APP_NAME,
        description="Трекер привычек: отметки, серии, недельный прогресс и графики",
        version=settings.VERSION,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan
    )

    app.state.tracker = tracker
    app.state.settings = settings
    app.state.app_config = app_config
    app.state.started_at = time.time()

    # ===== MIDDLEWARE =====

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Логирование запросов и времени обработки"""
        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        logger.info(
            f"{request.method} {request.url.path} "
            f"- {response.status_code} "
            f"- {process_time:.3f}s"
        )
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        return response

    # ===== ОБРАБОТЧИКИ ОШИБОК =====

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content={"detail": str(exc), "status_code": 404}
        )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=400,
            content={"detail": str(exc), "status_code": 400}
        )

    @app.exception_handler(StorageError)
    async def storage_error_handler(request: Request, exc: StorageError):
        logger.error(f"Storage error: {exc}")
        return JSONResponse(
            status_code=503,
            content={"detail": "Storage is unavailable", "status_code": 503}
        )

    # ===== РОУТЕРЫ =====

    app.include_router(habits.router)
    app.include_router(stats.router)
    app.include_router(charts.router)
    app.include_router(settings_api.router)

    @app.get("/health", response_model=HealthCheck)
    async def health_check(request: Request):
        tracker_instance = request.app.state.tracker
        return HealthCheck(
            status="healthy",
            service="habitflow-dashboard",
            version=settings.VERSION,
            timestamp=time.time(),
            storage_available=bool(tracker_instance and tracker_instance.storage_available)
        )

    return app
