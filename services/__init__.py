# services/__init__.py

"""
Сервисы Routine Tracker: сессия трекера, синхронизация и планировщик.
"""

import logging
from typing import Optional

from core.database import LocalStore
from core.reconciler import DayReconciler
from .sync_client import RemoteSyncClient
from .tracker_service import RoutineTrackerService, UnknownRoutineError
from .scheduler import DayRolloverScheduler

logger = logging.getLogger(__name__)

def build_tracker_service(tracker_config) -> RoutineTrackerService:
    """Собрать сессию трекера из конфигурации"""
    local_store = LocalStore(
        tracker_config.storage.path,
        tracker_config.routines,
        tz_name=tracker_config.timezone
    )

    sync_client: Optional[RemoteSyncClient] = None
    if tracker_config.sync.enabled:
        sync_client = RemoteSyncClient(
            tracker_config.sync.api_base,
            client_key=tracker_config.sync.client_key,
            timeout=tracker_config.sync.request_timeout
        )
    else:
        logger.info("☁️ Remote sync disabled")

    return RoutineTrackerService(local_store, sync_client, DayReconciler())

__all__ = [
    'RoutineTrackerService',
    'UnknownRoutineError',
    'RemoteSyncClient',
    'DayRolloverScheduler',
    'build_tracker_service'
]
