#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Routine Tracker - Local Store
Локальный снимок состояния: загрузка, атомарное сохранение, импорт/экспорт

Снимок хранится одним JSON документом. Частичных обновлений нет:
вызывающий код читает Store целиком, меняет его и сохраняет целиком.
"""

import os
import json
import tempfile
import logging
from datetime import date
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from models.routine import Store
from utils.datetime_utils import format_date, today as local_today
from utils.validators import has_snapshot_shape

logger = logging.getLogger(__name__)

# ===== EXCEPTIONS =====

class StoreError(Exception):
    """Базовое исключение локального хранилища"""
    pass

class StoreWriteError(StoreError):
    """Не удалось записать снимок на диск"""
    pass

class ImportDataError(StoreError):
    """Импортируемые данные не прошли проверку"""
    pass

# ===== LOCAL STORE =====

class LocalStore:
    """Владелец персистентного снимка трекера"""

    EXPORT_PREFIX = "routine-tracker"

    def __init__(self, path: Union[str, Path], routines: Iterable[str], tz_name: Optional[str] = None):
        self.path = Path(path)
        self.routines: List[str] = list(routines)
        self.tz_name = tz_name

    def _today(self) -> str:
        return format_date(local_today(self.tz_name))

    def fresh(self, today: Optional[str] = None) -> Store:
        """Новый Store с одной пустой записью на сегодня"""
        return Store.seeded(today or self._today(), self.routines)

    def load(self, today: Optional[str] = None) -> Store:
        """
        Загрузить снимок.

        Отсутствующий или нечитаемый снимок заменяется новым Store
        без ошибки для вызывающего; нечитаемый файл перед этим
        откладывается в сторону. Отдельные некорректные записи дней
        пропускаются, остальные дни сохраняются.
        """
        if not self.path.exists():
            logger.info(f"📂 Snapshot {self.path} not found, starting fresh")
            return self.fresh(today)

        skipped: List[str] = []
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
            if not has_snapshot_shape(raw):
                raise ValueError("snapshot has no 'days'/'routines' lists")
            store = Store.from_dict(raw, on_invalid_day=lambda day, e: skipped.append(str(e)))
        except (OSError, ValueError) as e:
            # json.JSONDecodeError - подкласс ValueError
            logger.warning(f"⚠️ Snapshot {self.path} is unusable ({e}), starting fresh")
            self._keep_corrupt()
            return self.fresh(today)

        if skipped:
            logger.warning(
                f"⚠️ Skipped {len(skipped)} malformed day records in {self.path}: {'; '.join(skipped)}"
            )
        logger.debug(f"Loaded snapshot with {len(store.days)} days")
        return store

    def corrupt_path(self) -> Path:
        return self.path.with_name(f"{self.path.name}.corrupt")

    def _keep_corrupt(self) -> None:
        """Отложить нечитаемый снимок, чтобы следующий save его не затёр"""
        target = self.corrupt_path()
        try:
            os.replace(self.path, target)
        except OSError as e:
            logger.error(f"❌ Could not move unusable snapshot aside: {e}")
            return
        logger.warning(f"📦 Unusable snapshot kept as {target}")

    def save(self, store: Store) -> None:
        """Атомарно перезаписать снимок целиком"""
        payload = json.dumps(store.to_dict(), ensure_ascii=False, indent=2)
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(self.path.parent)
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as e:
            logger.error(f"❌ Failed to save snapshot {self.path}: {e}")
            raise StoreWriteError(f"Failed to save snapshot: {e}") from e
        finally:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def replace(self, store: Store, new_data: Any) -> Store:
        """
        Проверить new_data и вернуть новый Store.

        Исходный store не изменяется ни при каких условиях; при ошибке
        выбрасывается ImportDataError.
        """
        if not isinstance(new_data, dict) or "days" not in new_data or "routines" not in new_data:
            raise ImportDataError("Import data must contain 'days' and 'routines'")
        try:
            replacement = Store.from_dict(new_data)
        except ValueError as e:
            raise ImportDataError(f"Invalid import data: {e}") from e

        logger.info(
            f"📥 Replacing store: {len(store.days)} -> {len(replacement.days)} days, "
            f"{len(replacement.routines)} routines"
        )
        return replacement

    # ===== EXPORT / IMPORT =====

    def export_filename(self, today: Union[str, date, None] = None) -> str:
        if isinstance(today, date):
            today = format_date(today)
        return f"{self.EXPORT_PREFIX}-{today or self._today()}.json"

    def export_snapshot(self, store: Store, export_dir: Union[str, Path],
                        today: Union[str, date, None] = None) -> Path:
        """Выгрузить Store в файл той же формы, что и снимок"""
        export_dir = Path(export_dir)
        export_dir.mkdir(parents=True, exist_ok=True)
        filename = export_dir / self.export_filename(today)
        with open(filename, 'w', encoding='utf-8') as f:
            json.dump(store.to_dict(), f, ensure_ascii=False, indent=2)
        logger.info(f"📤 Exported {len(store.days)} days to {filename}")
        return filename

    def import_snapshot(self, store: Store, file_path: Union[str, Path]) -> Store:
        """Прочитать файл экспорта и проверить его через replace()"""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise ImportDataError(f"Could not read {file_path}: {e}") from e
        return self.replace(store, data)
