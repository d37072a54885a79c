import argparse
import json

import main
from models.enums import PullStatus
from models.sync import PullResult

from conftest import StubSyncClient, make_day

def parse(*argv):
    return main.build_parser().parse_args(list(argv))

async def test_check_prints_today(service, capsys, sync_stub):
    code = await main.run_command(parse("check", "Mat"), service)

    assert code == 0
    assert "✅ Mat" in capsys.readouterr().out
    assert sync_stub.pushed == [("2024-03-14", service.today_record().checks)]

async def test_clear_requires_confirmation(service, capsys):
    assert await main.run_command(parse("clear"), service) == 1
    assert "--yes" in capsys.readouterr().err

async def test_sync_command_pulls_remote(local_store, clock, capsys):
    stub = StubSyncClient(pull_result=PullResult(status=PullStatus.OK, days=[make_day("2024-03-01", 3)]))
    service = main.RoutineTrackerService(local_store, stub, clock=clock)

    await main.run_command(parse("sync"), service)

    assert "синхронизации: 2" in capsys.readouterr().out
    assert service.store.has_day("2024-03-01")

async def test_export_and_history(service, tmp_path, capsys):
    await main.run_command(parse("export", "--dir", str(tmp_path)), service)
    exported = tmp_path / "routine-tracker-2024-03-14.json"

    assert json.loads(exported.read_text(encoding="utf-8"))["routines"]

    await main.run_command(parse("history", "--limit", "3"), service)
    assert "2024-03-14" in capsys.readouterr().out

async def test_amain_reports_unknown_routine(monkeypatch, service, sync_stub, capsys):
    monkeypatch.setattr(main, "build_tracker_service", lambda cfg: service)

    code = await main.amain(["check", "Yoga"])

    assert code == 1
    assert "Yoga" in capsys.readouterr().err
    assert sync_stub.closed

async def test_amain_reports_bad_import(monkeypatch, service, tmp_path, capsys):
    monkeypatch.setattr(main, "build_tracker_service", lambda cfg: service)
    bad = tmp_path / "broken.json"
    bad.write_text("{not json", encoding="utf-8")

    assert await main.amain(["import", str(bad)]) == 1
    assert "❌" in capsys.readouterr().err

def test_parser_defaults_to_today():
    args = parse()

    assert isinstance(args, argparse.Namespace)
    assert args.command is None
