from datetime import date

import pytest

from core.database import LocalStore
from models.enums import PullStatus, SyncStatus
from models.routine import DayRecord
from models.sync import PullResult, SyncResult
from services.tracker_service import RoutineTrackerService

ROUTINES = ["Träning", "Mat", "Vatten", "Sömn", "Arbete"]

class FakeClock:
    """Управляемые тестом часы"""

    def __init__(self, current: date):
        self.current = current

    def __call__(self) -> date:
        return self.current

class StubSyncClient:
    """Записывает отправки и отдаёт заранее заданный результат загрузки"""

    def __init__(self, pull_result: PullResult = None, push_ok: bool = True):
        self.pull_result = pull_result or PullResult(status=PullStatus.EMPTY)
        self.push_ok = push_ok
        self.pushed = []
        self.closed = False

    async def push_day(self, date, checks):
        self.pushed.append((date, dict(checks)))
        if self.push_ok:
            return SyncResult(status=SyncStatus.SAVED, date=date)
        return SyncResult(status=SyncStatus.FAILED, date=date, error="boom")

    async def pull_all(self):
        return self.pull_result

    async def close(self):
        self.closed = True

def make_day(date_str, done=0, routines=ROUTINES):
    return DayRecord(date=date_str, checks={r: i < done for i, r in enumerate(routines)})

@pytest.fixture
def routines():
    return list(ROUTINES)

@pytest.fixture
def snapshot_path(tmp_path):
    return tmp_path / "data" / "routine-tracker-v2.json"

@pytest.fixture
def local_store(snapshot_path):
    return LocalStore(snapshot_path, ROUTINES)

@pytest.fixture
def clock():
    return FakeClock(date(2024, 3, 14))

@pytest.fixture
def sync_stub():
    return StubSyncClient()

@pytest.fixture
def service(local_store, sync_stub, clock):
    return RoutineTrackerService(local_store, sync_stub, clock=clock)
