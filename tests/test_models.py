import pytest

from models.routine import DayRecord, Store

def test_day_record_counts_only_true_checks():
    record = DayRecord(date="2024-01-01", checks={"A": True, "B": False, "C": True})
    assert record.completed == 2

def test_missing_routine_reads_as_unchecked():
    record = DayRecord(date="2024-01-01", checks={"A": True})
    assert record.is_checked("A")
    assert not record.is_checked("New routine")

def test_from_dict_rejects_bad_date():
    with pytest.raises(ValueError):
        DayRecord.from_dict({"date": "01/01/2024", "checks": {}})
    with pytest.raises(ValueError):
        DayRecord.from_dict("2024-01-01")

def test_from_dict_coerces_check_values():
    record = DayRecord.from_dict({"date": "2024-01-01", "checks": {"A": 1, "B": 0}})
    assert record.checks == {"A": True, "B": False}

def test_store_keeps_one_record_per_date():
    store = Store(routines=["A"], days=[
        DayRecord("2024-01-01", {"A": False}),
        DayRecord("2024-01-02", {"A": False}),
        DayRecord("2024-01-01", {"A": True}),
    ])
    assert [d.date for d in store.days] == ["2024-01-01", "2024-01-02"]
    assert store.find_day("2024-01-01").checks == {"A": True}

def test_with_day_does_not_mutate_original():
    store = Store(routines=["A"], days=[DayRecord("2024-01-01", {"A": False})])
    updated = store.with_day(DayRecord("2024-01-01", {"A": True}))
    assert store.find_day("2024-01-01").checks == {"A": False}
    assert updated.find_day("2024-01-01").checks == {"A": True}

def test_store_from_dict_requires_lists():
    with pytest.raises(ValueError):
        Store.from_dict({"routines": ["A"], "days": None})

def test_store_dict_round_trip():
    data = {
        "routines": ["A", "B"],
        "days": [{"date": "2024-01-01", "checks": {"A": True, "B": False}}],
        "version": 1,
    }
    assert Store.from_dict(data).to_dict() == data

def test_store_from_dict_bad_day_strict_and_lenient():
    data = {"routines": ["A"], "days": [{"date": "2024-01-01", "checks": {"A": True}}, {"date": "2024-1-2"}]}

    with pytest.raises(ValueError):
        Store.from_dict(data)

    rejected = []
    store = Store.from_dict(data, on_invalid_day=lambda day, e: rejected.append(day))

    assert [d.date for d in store.days] == ["2024-01-01"]
    assert rejected == [{"date": "2024-1-2"}]
