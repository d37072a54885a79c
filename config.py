#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Routine Tracker - Configuration
Централизованная конфигурация клиента с валидацией

Версия: 1.0.0
"""

import os
import sys
import logging
from pathlib import Path
from typing import Optional, Dict, Any, List
from dataclasses import dataclass
from enum import Enum

import pytz

from utils.validators import is_valid_routine_name

DEFAULT_ROUTINES = ["Träning", "Mat", "Vatten", "Sömn", "Arbete"]

class Environment(Enum):
    """Среды выполнения"""
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"

class LogLevel(Enum):
    """Уровни логирования"""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

@dataclass
class StorageConfig:
    """Конфигурация локального снимка"""
    path: Path
    export_dir: Path

@dataclass
class SyncConfig:
    """Конфигурация синхронизации с прокси"""
    api_base: str = "http://localhost:3000/api"
    client_key: Optional[str] = None
    enabled: bool = True
    request_timeout: Optional[float] = None

@dataclass
class SchedulerConfig:
    """Конфигурация проверки смены дня"""
    day_check_interval_seconds: int = 60

class TrackerConfig:
    """Главный класс конфигурации"""

    def __init__(self):
        self.environment = Environment(os.getenv('ENVIRONMENT', 'development'))
        self._load_config()
        self._validate_config()

    def _load_config(self):
        """Загрузка конфигурации из переменных окружения"""

        # Директории
        self.data_dir = Path(os.getenv('DATA_DIR', 'data'))
        self.export_dir = Path(os.getenv('EXPORT_DIR', 'exports'))
        self.log_dir = Path(os.getenv('LOG_DIR', 'logs'))

        self.storage = StorageConfig(
            path=self.data_dir / "routine-tracker-v2.json",
            export_dir=self.export_dir
        )

        # Рутины
        self.routines = self._parse_routines(os.getenv('TRACKER_ROUTINES'))
        self.timezone = os.getenv('TRACKER_TIMEZONE') or None

        # Синхронизация
        timeout = os.getenv('SYNC_TIMEOUT')
        self.sync = SyncConfig(
            api_base=os.getenv('TRACKER_API_BASE', 'http://localhost:3000/api').rstrip('/'),
            client_key=os.getenv('TRACKER_CLIENT_KEY') or None,
            enabled=os.getenv('SYNC_ENABLED', 'true').lower() == 'true',
            request_timeout=float(timeout) if timeout else None
        )

        self.scheduler = SchedulerConfig(
            day_check_interval_seconds=int(os.getenv('DAY_CHECK_INTERVAL', 60))
        )

        # Логирование
        self.log_level = LogLevel(os.getenv('LOG_LEVEL', 'INFO'))
        self.log_to_file = os.getenv('LOG_TO_FILE', 'false').lower() == 'true'
        self.log_format = os.getenv(
            'LOG_FORMAT',
            '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )

    @staticmethod
    def _parse_routines(raw: Optional[str]) -> List[str]:
        """Список рутин из строки через запятую"""
        if not raw:
            return list(DEFAULT_ROUTINES)
        return [name.strip() for name in raw.split(',') if name.strip()]

    def _validate_config(self):
        """Валидация конфигурации"""
        errors = []

        if not self.routines:
            errors.append("TRACKER_ROUTINES не содержит ни одной рутины")

        if len(set(self.routines)) != len(self.routines):
            errors.append("TRACKER_ROUTINES содержит повторяющиеся названия")

        invalid = [name for name in self.routines if not is_valid_routine_name(name)]
        if invalid:
            errors.append(f"TRACKER_ROUTINES содержит некорректные названия: {invalid}")

        if self.scheduler.day_check_interval_seconds <= 0:
            errors.append("DAY_CHECK_INTERVAL должен быть положительным числом")

        if self.sync.request_timeout is not None and self.sync.request_timeout <= 0:
            errors.append("SYNC_TIMEOUT должен быть положительным числом")

        if self.timezone:
            try:
                pytz.timezone(self.timezone)
            except pytz.UnknownTimeZoneError:
                errors.append(f"Неизвестная временная зона: {self.timezone}")

        if self.sync.enabled and not self.sync.api_base.startswith(('http://', 'https://')):
            logging.warning("⚠️ TRACKER_API_BASE не является HTTP адресом - синхронизация отключена")
            self.sync.enabled = False

        if errors:
            raise ValueError("Ошибки конфигурации:\n" + "\n".join(f"• {error}" for error in errors))

    def ensure_directories(self):
        """Создание необходимых директорий"""
        directories = [self.data_dir, self.export_dir]
        if self.log_to_file:
            directories.append(self.log_dir)

        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)

    def get_logging_config(self) -> Dict[str, Any]:
        """Получение конфигурации логирования"""
        handlers = ['console']
        if self.log_to_file:
            handlers.append('file')

        logging_config = {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    'format': self.log_format,
                    'datefmt': '%Y-%m-%d %H:%M:%S'
                }
            },
            'handlers': {
                'console': {
                    'class': 'logging.StreamHandler',
                    'level': self.log_level.value,
                    'formatter': 'default',
                    'stream': sys.stderr
                }
            },
            'loggers': {
                '': {
                    'level': self.log_level.value,
                    'handlers': handlers,
                    'propagate': False
                },
                'aiohttp': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'apscheduler': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                },
                'httpx': {
                    'level': 'WARNING',
                    'handlers': handlers,
                    'propagate': False
                }
            }
        }

        if self.log_to_file:
            logging_config['handlers']['file'] = {
                'class': 'logging.handlers.RotatingFileHandler',
                'level': self.log_level.value,
                'formatter': 'default',
                'filename': str(self.log_dir / f"tracker_{self.environment.value}.log"),
                'maxBytes': 10485760,  # 10MB
                'backupCount': 5,
                'encoding': 'utf-8'
            }

        return logging_config

# Глобальный экземпляр конфигурации
config = TrackerConfig()

__all__ = [
    'config',
    'TrackerConfig',
    'Environment',
    'LogLevel',
    'StorageConfig',
    'SyncConfig',
    'SchedulerConfig',
    'DEFAULT_ROUTINES'
]
