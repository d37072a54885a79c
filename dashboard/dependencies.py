#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Routine Tracker - Proxy Dependencies
Зависимости FastAPI: проверка ключа клиента и хранилище дней
"""

import logging
import secrets
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from notion_client import AsyncClient

from dashboard.config import ProxySettings, get_settings
from dashboard.core.notion_store import DayStoreError, NotionDayStore

logger = logging.getLogger(__name__)

# ===== ГЛОБАЛЬНЫЕ ПЕРЕМЕННЫЕ =====

# Хранилище дней (синглтон)
_day_store: Optional[NotionDayStore] = None

# ===== АВТОРИЗАЦИЯ =====

async def verify_client_key(
    x_client_key: Optional[str] = Header(default=None),
    settings: ProxySettings = Depends(get_settings)
) -> None:
    """Без SHARED_CLIENT_KEY пропускаются все запросы"""
    if not settings.auth_enabled:
        return
    if x_client_key is None or not secrets.compare_digest(x_client_key, settings.SHARED_CLIENT_KEY):
        logger.warning("🔒 Rejected request with invalid client key")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")

# ===== ХРАНИЛИЩЕ ДНЕЙ =====

def init_day_store(settings: ProxySettings) -> NotionDayStore:
    """Инициализация хранилища дней в Notion"""
    global _day_store

    if _day_store is None:
        if not settings.notion_configured:
            raise DayStoreError("NOTION_API_KEY and NOTION_DATABASE_ID must be configured")
        logger.info("🔄 Инициализация NotionDayStore...")
        _day_store = NotionDayStore(
            AsyncClient(auth=settings.NOTION_API_KEY),
            settings.NOTION_DATABASE_ID,
            settings.routines,
            date_property=settings.NOTION_DATE_PROPERTY,
            page_size=settings.NOTION_PAGE_SIZE
        )
        logger.info("✅ NotionDayStore инициализирован")

    return _day_store

async def get_day_store(settings: ProxySettings = Depends(get_settings)) -> NotionDayStore:
    try:
        return init_day_store(settings)
    except DayStoreError as e:
        logger.error(f"❌ Day store unavailable: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

async def close_day_store() -> None:
    global _day_store

    if _day_store is not None:
        await _day_store.client.aclose()
        _day_store = None
        logger.info("🧹 NotionDayStore закрыт")
