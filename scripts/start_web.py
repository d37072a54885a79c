#!/usr/bin/env python3
"""
Запуск прокси-сервиса трекера
Использование: python scripts/start_web.py [--port PORT] [--host HOST] [--dev]
"""

import sys
import argparse
import logging
from pathlib import Path

# Добавляем корневую папку в Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import uvicorn

from dashboard.config import get_settings

logger = logging.getLogger(__name__)

def parse_args(argv=None):
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Routine Tracker proxy")
    parser.add_argument('--host', default=settings.HOST, help='Хост (по умолчанию из HOST)')
    parser.add_argument('--port', type=int, default=settings.PORT, help='Порт (по умолчанию из PORT)')
    parser.add_argument('--dev', action='store_true', help='Режим разработки с автоперезагрузкой')
    return parser.parse_args(argv)

def main(argv=None):
    args = parse_args(argv)
    settings = get_settings()
    settings.setup_logging()

    logger.info(f"🚀 Starting proxy on {args.host}:{args.port} ({settings.ENVIRONMENT})")
    uvicorn.run(
        "dashboard.app:app",
        host=args.host,
        port=args.port,
        reload=args.dev,
        log_level=settings.LOG_LEVEL.lower(),
        app_dir=str(project_root)
    )

if __name__ == "__main__":
    main()
