import logging
import logging.config
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional

def setup_logging(logging_config: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """Применяет dictConfig; без конфигурации - только консоль"""
    if logging_config:
        for handler in logging_config.get('handlers', {}).values():
            filename = handler.get('filename')
            if filename:
                Path(filename).parent.mkdir(exist_ok=True, parents=True)
        logging.config.dictConfig(logging_config)
    else:
        logging.basicConfig(
            level=logging.INFO,
            format='%(asctime)s [%(levelname)s] %(name)s: %(message)s'
        )
    return logging.getLogger()

def add_file_handler(log_file: str, max_bytes: int = 10_000_000, backup_count: int = 5) -> RotatingFileHandler:
    Path(log_file).parent.mkdir(exist_ok=True, parents=True)
    handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    handler.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s'))
    logging.getLogger().addHandler(handler)
    return handler
