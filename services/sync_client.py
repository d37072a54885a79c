#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Routine Tracker - Remote Sync Client
Клиент прокси-сервиса: отправка дня и загрузка всех дней

Все операции "best effort": ошибки сети и прокси логируются и
возвращаются как результат неудачи, исключения наружу не выходят.
Повторов, backoff и офлайн-очереди нет.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

import aiohttp

from models.enums import PullStatus, SyncStatus
from models.routine import DayRecord
from models.sync import PullResult, SyncResult
from utils.decorators import best_effort

logger = logging.getLogger(__name__)

CLIENT_KEY_HEADER = "x-client-key"

class RemoteSyncError(Exception):
    """Прокси ответил неуспешным статусом или неверными данными"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status

# Ошибки, которые считаются сбоем синхронизации, а не багом клиента
SYNC_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError, RemoteSyncError, ValueError)

class RemoteSyncClient:
    """HTTP клиент прокси-сервиса на aiohttp"""

    def __init__(self, base_url: str, client_key: Optional[str] = None,
                 timeout: Optional[float] = None, enabled: bool = True,
                 session: Optional[aiohttp.ClientSession] = None):
        self.base_url = base_url.rstrip('/')
        self.client_key = client_key
        self.timeout = timeout
        self.enabled = enabled
        self._session = session
        self._owns_session = session is None

    # ===== SESSION =====

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            kwargs = {}
            if self.timeout:
                kwargs['timeout'] = aiohttp.ClientTimeout(total=self.timeout)
            self._session = aiohttp.ClientSession(**kwargs)
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def __aenter__(self) -> "RemoteSyncClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.client_key:
            headers[CLIENT_KEY_HEADER] = self.client_key
        return headers

    async def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{path}"
        session = self._get_session()
        async with session.request(method, url, json=payload, headers=self._headers()) as resp:
            if resp.status >= 400:
                text = await resp.text()
                raise RemoteSyncError(f"{method} {path} -> {resp.status}: {text}", status=resp.status)
            return await resp.json(content_type=None)

    # ===== OPERATIONS =====

    @best_effort(SyncResult.failure, SYNC_ERRORS, label="Remote save")
    async def _save_day(self, date: str, checks: Dict[str, bool]) -> SyncResult:
        data = await self._request("POST", "/saveDay", {"date": date, "checks": dict(checks)})
        if not isinstance(data, dict):
            raise RemoteSyncError("saveDay returned a non-object response")
        return SyncResult(
            status=SyncStatus.SAVED,
            page_id=data.get("pageId"),
            created=bool(data.get("created"))
        )

    async def push_day(self, date: str, checks: Dict[str, bool]) -> SyncResult:
        """Отправить запись одного дня; результат неудачи не выбрасывается"""
        if not self.enabled:
            return SyncResult(status=SyncStatus.SKIPPED, date=date)
        result = await self._save_day(date, checks)
        result.date = date
        if result.ok:
            logger.debug(f"☁️ Day {date} {'created' if result.created else 'updated'} remotely")
        return result

    @best_effort(PullResult.failure, SYNC_ERRORS, label="Remote load")
    async def _load_days(self) -> PullResult:
        data = await self._request("GET", "/loadDays")
        if not isinstance(data, dict) or not isinstance(data.get("days"), list):
            raise RemoteSyncError("loadDays response has no 'days' list")
        days = [DayRecord.from_dict(item) for item in data["days"]]
        status = PullStatus.OK if days else PullStatus.EMPTY
        return PullResult(status=status, days=days)

    async def pull_all(self) -> PullResult:
        """Загрузить все дни с прокси"""
        if not self.enabled:
            return PullResult(status=PullStatus.FAILED, error="sync disabled")
        result = await self._load_days()
        logger.info(f"☁️ Remote pull: {result.status.value}, {len(result.days)} days")
        return result

    async def health(self) -> bool:
        try:
            data = await self._request("GET", "/health")
        except SYNC_ERRORS as e:
            logger.warning(f"⚠️ Proxy health check failed: {e}")
            return False
        return isinstance(data, dict) and data.get("ok") is True
