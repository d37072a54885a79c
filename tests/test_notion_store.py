import pytest

from dashboard.core.notion_store import DayStoreError, NotionDayStore
from models.enums import UpsertOutcome

ROUTINES = ["Mat", "Sömn"]

def page(page_id, date=None, **checks):
    props = {name: {"checkbox": value} for name, value in checks.items()}
    if date is not None:
        props["Date"] = {"date": {"start": date}}
    return {"id": page_id, "properties": props}

class FakeDatabases:
    def __init__(self, batches):
        self.batches = list(batches)
        self.calls = []

    async def query(self, **params):
        self.calls.append(params)
        if "filter" in params:
            wanted = params["filter"]["date"]["equals"]
            results = [p for batch in self.batches for p in batch
                       if p["properties"].get("Date", {}).get("date", {}).get("start") == wanted]
            return {"results": results[:1], "has_more": False, "next_cursor": None}
        index = int(params.get("start_cursor", 0))
        has_more = index + 1 < len(self.batches)
        return {
            "results": self.batches[index] if self.batches else [],
            "has_more": has_more,
            "next_cursor": str(index + 1) if has_more else None,
        }

class FakePages:
    def __init__(self):
        self.created = []
        self.updated = []

    async def create(self, **params):
        self.created.append(params)
        return {"id": "new-page"}

    async def update(self, **params):
        self.updated.append(params)
        return {"id": params["page_id"]}

class FakeNotion:
    def __init__(self, batches=()):
        self.databases = FakeDatabases(batches)
        self.pages = FakePages()

def make_store(client):
    return NotionDayStore(client, "db-1", ROUTINES, page_size=2)

def test_requires_database_id():
    with pytest.raises(DayStoreError):
        NotionDayStore(FakeNotion(), "", ROUTINES)

def test_from_page_maps_checkboxes():
    store = make_store(FakeNotion())

    day = store.from_page(page("p1", "2024-03-14T08:00:00.000+01:00", Mat=True))

    assert day == {"date": "2024-03-14", "checks": {"Mat": True, "Sömn": False}}
    assert store.from_page(page("p2", Mat=True)) is None

def test_to_properties():
    store = make_store(FakeNotion())

    props = store.to_properties("2024-03-14", {"Mat": 1, "Other": True})

    assert props == {
        "Date": {"date": {"start": "2024-03-14"}},
        "Mat": {"checkbox": True},
        "Sömn": {"checkbox": False},
    }

async def test_load_days_follows_cursor():
    client = FakeNotion([
        [page("a", "2024-03-01", Mat=True), page("b", "2024-03-02")],
        [page("c"), page("d", "2024-03-04", Sömn=True)],
    ])
    store = make_store(client)

    days = await store.load_days()

    assert [d["date"] for d in days] == ["2024-03-01", "2024-03-02", "2024-03-04"]
    first, second = client.databases.calls
    assert "start_cursor" not in first
    assert second["start_cursor"] == "1"
    assert first["database_id"] == "db-1"
    assert first["page_size"] == 2
    assert first["sorts"] == [{"property": "Date", "direction": "ascending"}]

async def test_load_days_empty_database():
    assert await make_store(FakeNotion()).load_days() == []

async def test_save_day_creates_missing_page():
    client = FakeNotion([[page("a", "2024-03-01")]])

    outcome, page_id = await make_store(client).save_day("2024-03-14", {"Mat": True})

    assert (outcome, page_id) == (UpsertOutcome.CREATED, "new-page")
    created = client.pages.created[0]
    assert created["parent"] == {"database_id": "db-1"}
    assert created["properties"]["Mat"] == {"checkbox": True}
    assert client.pages.updated == []

async def test_save_day_updates_existing_page():
    client = FakeNotion([[page("a", "2024-03-14")]])

    outcome, page_id = await make_store(client).save_day("2024-03-14", {"Sömn": True})

    assert (outcome, page_id) == (UpsertOutcome.UPDATED, "a")
    assert client.pages.updated[0]["properties"]["Sömn"] == {"checkbox": True}
    assert client.pages.created == []
