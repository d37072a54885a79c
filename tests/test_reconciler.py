from core.reconciler import DayReconciler
from models.routine import DayRecord, Store

from conftest import ROUTINES, make_day

def test_creates_today_with_all_routines_false():
    store = Store(routines=ROUTINES, days=[make_day("2024-03-12", 3), make_day("2024-03-13", 5)])

    result = DayReconciler().ensure_today(store, "2024-03-14")

    assert result.created
    todays = [d for d in result.store.days if d.date == "2024-03-14"]
    assert len(todays) == 1
    assert todays[0].checks == {r: False for r in ROUTINES}
    assert result.store.days[:2] == store.days
    assert len(store.days) == 2

def test_is_idempotent():
    reconciler = DayReconciler()
    first = reconciler.ensure_today(Store(routines=ROUTINES, days=[]), "2024-03-14")
    second = reconciler.ensure_today(first.store, "2024-03-14")

    assert not second.created
    assert second.store is first.store
    assert len(second.store.days) == 1

def test_uses_current_routine_set_without_backfill():
    old = DayRecord("2024-03-13", {"Träning": True})
    store = Store(routines=ROUTINES, days=[old])

    result = DayReconciler().ensure_today(store, "2024-03-14")

    assert result.store.find_day("2024-03-13").checks == {"Träning": True}
    assert set(result.store.find_day("2024-03-14").checks) == set(ROUTINES)

def test_clock_moving_backwards_deletes_nothing():
    store = Store(routines=ROUTINES, days=[make_day("2024-03-14", 2)])

    result = DayReconciler().ensure_today(store, "2024-03-13")

    assert result.created
    assert [d.date for d in result.store.days] == ["2024-03-14", "2024-03-13"]
    assert result.store.find_day("2024-03-14").completed == 2

def test_explicit_routine_override():
    result = DayReconciler(routines=["A"]).ensure_today(Store(routines=ROUTINES), "2024-03-14")
    assert result.store.find_day("2024-03-14").checks == {"A": False}
