#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Routine Tracker - Proxy Service (FastAPI Application)
Прокси между клиентом трекера и базой документов Notion

Версия: 1.0.0
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dashboard.api import days
from dashboard.config import get_settings
from dashboard.dependencies import close_day_store

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Управление жизненным циклом приложения"""
    settings = get_settings()

    # Startup
    logger.info(f"🚀 Запуск {settings.APP_NAME} v{settings.VERSION}...")
    if not settings.notion_configured:
        logger.warning("⚠️ Notion не настроен: /api/loadDays и /api/saveDay вернут 500")
    if not settings.auth_enabled:
        logger.warning("⚠️ SHARED_CLIENT_KEY не задан: запросы принимаются без проверки")
    logger.info(f"🌐 Прокси доступен на: http://{settings.HOST}:{settings.PORT}")

    yield

    # Shutdown
    logger.info("🛑 Остановка прокси...")
    try:
        await close_day_store()
        logger.info("✅ Ресурсы очищены")
    except Exception as e:
        logger.error(f"❌ Ошибка при остановке: {e}")

def create_app() -> FastAPI:
    settings = get_settings()

    application = FastAPI(
        title=settings.APP_NAME,
        description="Прокси записей трекера рутин в базу Notion",
        version=settings.VERSION,
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url=None,
        openapi_url="/api/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan
    )

    # ===== MIDDLEWARE =====

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    # ===== ERROR HANDLERS =====

    # Ошибки отдаются простым текстом
    @application.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=exc.headers)

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Invalid request to {request.url.path}: {exc.errors()}")
        return PlainTextResponse("Missing date/checks", status_code=400)

    application.include_router(days.router)
    return application

app = create_app()
