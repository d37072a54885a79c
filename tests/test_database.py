import json

import pytest

from core.database import ImportDataError, LocalStore, StoreWriteError
from models.routine import DayRecord, Store

from conftest import ROUTINES, make_day

TODAY = "2024-03-14"

def test_load_without_snapshot_seeds_today(local_store):
    store = local_store.load(TODAY)
    assert store.routines == ROUTINES
    assert store.version == 1
    assert [d.date for d in store.days] == [TODAY]
    assert store.days[0].checks == {r: False for r in ROUTINES}

@pytest.mark.parametrize("content", [
    "not json at all",
    json.dumps({"days": [], "routines": "Mat"}),
    json.dumps({"routines": ROUTINES}),
    json.dumps([1, 2, 3]),
])
def test_load_degrades_to_default_on_invalid_snapshot(local_store, snapshot_path, content):
    snapshot_path.parent.mkdir(parents=True)
    snapshot_path.write_text(content, encoding="utf-8")

    store = local_store.load(TODAY)

    assert [d.date for d in store.days] == [TODAY]
    assert store.routines == ROUTINES
    assert local_store.corrupt_path().read_text(encoding="utf-8") == content
    assert not snapshot_path.exists()

def test_load_skips_malformed_records_and_keeps_history(local_store, snapshot_path):
    good = [make_day(f"2024-02-{n:02d}", 5).to_dict() for n in range(1, 30)]
    snapshot_path.parent.mkdir(parents=True)
    snapshot_path.write_text(json.dumps({
        "routines": ROUTINES,
        "days": good + [{"date": "2024-2-1"}, {"date": "yesterday"}, "junk"],
    }), encoding="utf-8")

    store = local_store.load(TODAY)

    assert [d.date for d in store.days] == [d["date"] for d in good]
    assert all(d.completed == 5 for d in store.days)
    assert not local_store.corrupt_path().exists()

def test_save_then_load_round_trip(local_store):
    store = Store(routines=ROUTINES, days=[
        make_day("2024-01-01", done=5),
        make_day("2024-01-02", done=1),
        DayRecord("2023-12-31", {"Träning": True}),
    ], version=1)

    local_store.save(store)

    assert local_store.load(TODAY) == store

def test_save_overwrites_whole_snapshot_atomically(local_store, snapshot_path):
    local_store.save(Store(routines=ROUTINES, days=[make_day("2024-01-01", 3)]))
    local_store.save(Store(routines=ROUTINES, days=[make_day("2024-01-02", 1)]))

    data = json.loads(snapshot_path.read_text(encoding="utf-8"))
    assert [d["date"] for d in data["days"]] == ["2024-01-02"]
    assert [p.name for p in snapshot_path.parent.iterdir()] == [snapshot_path.name]

def test_save_failure_raises_store_write_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("file, not a directory")
    store = LocalStore(blocker / "snapshot.json", ROUTINES)

    with pytest.raises(StoreWriteError):
        store.save(store.fresh(TODAY))

def test_replace_accepts_valid_data(local_store):
    current = local_store.fresh(TODAY)
    new_data = {"routines": ["A", "B"], "days": [{"date": "2024-01-01", "checks": {"A": True}}]}

    replaced = local_store.replace(current, new_data)

    assert replaced.routines == ["A", "B"]
    assert [d.date for d in replaced.days] == ["2024-01-01"]
    assert [d.date for d in current.days] == [TODAY]

@pytest.mark.parametrize("new_data", [
    {"routines": ROUTINES},
    {"days": []},
    {"days": "nope", "routines": ROUTINES},
    {"days": [{"checks": {}}], "routines": ROUTINES},
    None,
])
def test_replace_rejects_invalid_data_and_leaves_store_untouched(local_store, new_data):
    current = local_store.fresh(TODAY)
    before = current.to_dict()

    with pytest.raises(ImportDataError):
        local_store.replace(current, new_data)

    assert current.to_dict() == before

def test_export_and_import_snapshot(local_store, tmp_path):
    store = Store(routines=ROUTINES, days=[make_day("2024-01-01", 4)])

    path = local_store.export_snapshot(store, tmp_path / "exports", TODAY)

    assert path.name == f"routine-tracker-{TODAY}.json"
    assert json.loads(path.read_text(encoding="utf-8")) == store.to_dict()
    assert local_store.import_snapshot(local_store.fresh(TODAY), path) == store

def test_import_unreadable_file_raises(local_store, tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{", encoding="utf-8")

    with pytest.raises(ImportDataError):
        local_store.import_snapshot(local_store.fresh(TODAY), bad)
    with pytest.raises(ImportDataError):
        local_store.import_snapshot(local_store.fresh(TODAY), tmp_path / "missing.json")
