#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Routine Tracker - Proxy Configuration
Настройки прокси-сервиса между трекером и базой Notion

Версия: 1.0.0
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from utils.logger import add_file_handler

DEFAULT_PROXY_ROUTINES = "Träning,Mat,Vatten,Sömn,Arbete"

class ProxySettings(BaseSettings):
    """Настройки прокси-сервиса"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # ===== ОСНОВНЫЕ НАСТРОЙКИ =====

    APP_NAME: str = Field(
        default="Routine Tracker Proxy",
        description="Название приложения"
    )

    VERSION: str = Field(
        default="1.0.0",
        description="Версия прокси"
    )

    ENVIRONMENT: str = Field(
        default="development",
        description="Среда выполнения (development/production/testing)"
    )

    DEBUG: bool = Field(
        default=False,
        description="Режим отладки"
    )

    # ===== СЕТЕВЫЕ НАСТРОЙКИ =====

    HOST: str = Field(
        default="0.0.0.0",
        description="Хост для запуска прокси"
    )

    PORT: int = Field(
        default=3000,
        description="Порт для запуска прокси"
    )

    ALLOWED_ORIGINS: str = Field(
        default="*",
        description="Разрешенные источники для CORS, через запятую"
    )

    # ===== АВТОРИЗАЦИЯ =====

    SHARED_CLIENT_KEY: Optional[str] = Field(
        default=None,
        description="Общий секрет клиента; без него запросы не проверяются"
    )

    # ===== NOTION =====

    NOTION_API_KEY: Optional[str] = Field(
        default=None,
        description="Токен интеграции Notion"
    )

    NOTION_DATABASE_ID: Optional[str] = Field(
        default=None,
        description="ID базы Notion с записями по дням"
    )

    NOTION_DATE_PROPERTY: str = Field(
        default="Date",
        description="Свойство даты в базе Notion"
    )

    NOTION_PAGE_SIZE: int = Field(
        default=100,
        description="Размер страницы при выборке из Notion"
    )

    PROXY_ROUTINES: str = Field(
        default=DEFAULT_PROXY_ROUTINES,
        description="Checkbox-свойства рутин в базе Notion, через запятую"
    )

    # ===== ЛОГИРОВАНИЕ =====

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Уровень логирования (DEBUG/INFO/WARNING/ERROR/CRITICAL)"
    )

    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Формат логов"
    )

    LOG_FILE: Optional[Path] = Field(
        default=None,
        description="Файл логов (ротация по размеру)"
    )

    # ===== ВАЛИДАТОРЫ =====

    @field_validator('ENVIRONMENT')
    @classmethod
    def validate_environment(cls, v):
        allowed_envs = ['development', 'production', 'testing', 'staging']
        if v.lower() not in allowed_envs:
            raise ValueError(f"ENVIRONMENT must be one of {allowed_envs}")
        return v.lower()

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        allowed_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in allowed_levels:
            raise ValueError(f"LOG_LEVEL must be one of {allowed_levels}")
        return v.upper()

    @field_validator('PORT')
    @classmethod
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError("PORT must be between 1 and 65535")
        return v

    @field_validator('NOTION_PAGE_SIZE')
    @classmethod
    def validate_page_size(cls, v):
        # Ограничение API Notion
        if not 1 <= v <= 100:
            raise ValueError("NOTION_PAGE_SIZE must be between 1 and 100")
        return v

    @field_validator('SHARED_CLIENT_KEY', 'NOTION_API_KEY', 'NOTION_DATABASE_ID')
    @classmethod
    def empty_as_none(cls, v):
        return v or None

    # ===== МЕТОДЫ КОНФИГУРАЦИИ =====

    @property
    def allowed_origins(self) -> List[str]:
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(',') if origin.strip()]

    @property
    def routines(self) -> List[str]:
        return [name.strip() for name in self.PROXY_ROUTINES.split(',') if name.strip()]

    @property
    def auth_enabled(self) -> bool:
        return bool(self.SHARED_CLIENT_KEY)

    @property
    def notion_configured(self) -> bool:
        return bool(self.NOTION_API_KEY and self.NOTION_DATABASE_ID)

    def setup_logging(self) -> None:
        """Настройка логирования"""
        logging.basicConfig(
            level=getattr(logging, self.LOG_LEVEL),
            format=self.LOG_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        if self.LOG_FILE:
            add_file_handler(str(self.LOG_FILE))

        if not self.DEBUG:
            logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("httpx").setLevel(logging.WARNING)

@lru_cache
def get_settings() -> ProxySettings:
    """Кэшированный экземпляр настроек"""
    return ProxySettings()
