#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Routine Tracker - Notion Day Store
Отображение записей дня на страницы базы Notion

Каждая страница базы - один день: свойство даты плюс по одному
checkbox-свойству на рутину.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from models.enums import UpsertOutcome

logger = logging.getLogger(__name__)

class DayStoreError(Exception):
    """Ошибка хранилища документов"""
    pass

class NotionDayStore:
    """Записи дней в базе Notion через notion_client.AsyncClient"""

    def __init__(self, client, database_id: str, routines: Sequence[str],
                 date_property: str = "Date", page_size: int = 100):
        if not database_id:
            raise DayStoreError("NOTION_DATABASE_ID is not configured")
        self.client = client
        self.database_id = database_id
        self.routines = list(routines)
        self.date_property = date_property
        self.page_size = page_size

    # ===== MAPPING =====

    def to_properties(self, date: str, checks: Dict[str, Any]) -> Dict[str, Any]:
        properties: Dict[str, Any] = {self.date_property: {"date": {"start": date}}}
        for routine in self.routines:
            properties[routine] = {"checkbox": bool(checks.get(routine))}
        return properties

    def from_page(self, page: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Страница -> {date, checks}; None если у страницы нет даты"""
        props = page.get("properties") or {}
        date_value = (props.get(self.date_property) or {}).get("date") or {}
        start = date_value.get("start")
        if not start:
            return None
        checks = {
            routine: bool((props.get(routine) or {}).get("checkbox"))
            for routine in self.routines
        }
        return {"date": start[:10], "checks": checks}

    # ===== QUERIES =====

    async def _query(self, **params) -> Dict[str, Any]:
        return await self.client.databases.query(database_id=self.database_id, **params)

    async def load_days(self) -> List[Dict[str, Any]]:
        """Все дни базы, постранично, по возрастанию даты"""
        pages: List[Dict[str, Any]] = []
        cursor: Optional[str] = None
        while True:
            params: Dict[str, Any] = {
                "page_size": self.page_size,
                "sorts": [{"property": self.date_property, "direction": "ascending"}],
            }
            if cursor:
                params["start_cursor"] = cursor
            resp = await self._query(**params)
            pages.extend(resp.get("results", []))
            cursor = resp.get("next_cursor")
            if not resp.get("has_more") or not cursor:
                break

        days = [day for day in (self.from_page(page) for page in pages) if day]
        logger.info(f"📚 Loaded {len(days)} days from {len(pages)} Notion pages")
        return days

    async def find_page_id(self, date: str) -> Optional[str]:
        resp = await self._query(
            filter={"property": self.date_property, "date": {"equals": date}},
            page_size=1,
        )
        results = resp.get("results", [])
        return results[0]["id"] if results else None

    async def save_day(self, date: str, checks: Dict[str, Any]) -> Tuple[UpsertOutcome, str]:
        """Обновить страницу за date или создать новую"""
        properties = self.to_properties(date, checks)
        page_id = await self.find_page_id(date)
        if page_id:
            await self.client.pages.update(page_id=page_id, properties=properties)
            logger.info(f"📝 Updated Notion page {page_id} for {date}")
            return UpsertOutcome.UPDATED, page_id

        page = await self.client.pages.create(
            parent={"database_id": self.database_id},
            properties=properties,
        )
        logger.info(f"🆕 Created Notion page {page['id']} for {date}")
        return UpsertOutcome.CREATED, page["id"]
