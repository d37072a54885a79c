#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Routine Tracker - CLI
Ежедневные отметки рутин, статистика, тепловая карта и синхронизация

Использование: python main.py <command> [options]
"""

import sys
import asyncio
import argparse
import logging
import signal
from pathlib import Path
from typing import Optional

from config import config
from core.database import ImportDataError, StoreWriteError
from services import DayRolloverScheduler, RoutineTrackerService, UnknownRoutineError, build_tracker_service
from ui import messages
from utils.logger import setup_logging

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="routine-tracker",
        description="Daily routine tracker"
    )
    parser.add_argument('--no-sync', action='store_true', help='не обращаться к прокси')
    sub = parser.add_subparsers(dest='command')

    sub.add_parser('today', help='показать отметки за сегодня')

    check = sub.add_parser('check', help='отметить рутину выполненной')
    check.add_argument('routine')

    uncheck = sub.add_parser('uncheck', help='снять отметку с рутины')
    uncheck.add_argument('routine')

    sub.add_parser('reset', help='сбросить отметки за сегодня')

    clear = sub.add_parser('clear', help='удалить всю историю')
    clear.add_argument('--yes', action='store_true', help='подтвердить удаление')

    sub.add_parser('stats', help='сводная статистика и график')
    sub.add_parser('heatmap', help='тепловая карта за 52 недели')

    hist = sub.add_parser('history', help='история последних дней')
    hist.add_argument('--limit', type=int, default=14)

    export = sub.add_parser('export', help='экспорт в JSON')
    export.add_argument('--dir', type=Path, default=None)

    imp = sub.add_parser('import', help='импорт из JSON')
    imp.add_argument('file', type=Path)

    sub.add_parser('sync', help='загрузить все дни с прокси')
    sub.add_parser('watch', help='следить за сменой дня')

    return parser

async def watch(service: RoutineTrackerService) -> None:
    """Держит сессию открытой и создаёт запись при смене дня"""
    scheduler = DayRolloverScheduler(service.tick, config.scheduler.day_check_interval_seconds)
    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            pass

    scheduler.start()
    try:
        print(messages.today_message(service.today_record(), service.store.routines))
        await stop.wait()
    finally:
        scheduler.shutdown()

async def run_command(args: argparse.Namespace, service: RoutineTrackerService) -> int:
    service.start()
    command = args.command or 'today'

    if service.sync_client is not None and command in ('today', 'watch', 'sync'):
        await service.pull_remote()

    if command == 'today':
        print(messages.today_message(service.today_record(), service.store.routines))
    elif command in ('check', 'uncheck'):
        service.set_check(args.routine, command == 'check')
        print(messages.today_message(service.today_record(), service.store.routines))
    elif command == 'reset':
        service.reset_today()
        print(messages.today_message(service.today_record(), service.store.routines))
    elif command == 'clear':
        if not args.yes:
            print("Добавьте --yes чтобы удалить всю историю", file=sys.stderr)
            return 1
        service.clear_all()
        print("🧹 История удалена")
    elif command == 'stats':
        stats = service.stats()
        print(messages.stats_message(stats))
        print(messages.score_chart_message(stats.series))
    elif command == 'heatmap':
        stats = service.stats()
        print(messages.heatmap_message(stats.weeks, stats.routine_count))
    elif command == 'history':
        print(messages.history_message(service.history(args.limit), service.store.routines))
    elif command == 'export':
        path = service.export_file(args.dir or config.storage.export_dir)
        print(f"📤 {path}")
    elif command == 'import':
        service.import_file(args.file)
        print(f"📥 Импортировано дней: {len(service.store.days)}")
    elif command == 'sync':
        print(f"☁️ Дней после синхронизации: {len(service.store.days)}")
    elif command == 'watch':
        await watch(service)

    await service.drain()
    return 0

async def amain(argv: Optional[list] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.no_sync:
        config.sync.enabled = False

    service = build_tracker_service(config)
    try:
        return await run_command(args, service)
    except ImportDataError as e:
        logger.warning(f"Import rejected: {e}")
        print(f"❌ Не удалось прочитать файл: {e}", file=sys.stderr)
        return 1
    except UnknownRoutineError as e:
        print(f"❌ {e}. Доступные: {', '.join(service.store.routines)}", file=sys.stderr)
        return 1
    except StoreWriteError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 2
    finally:
        if service.sync_client is not None:
            await service.sync_client.close()

def main(argv: Optional[list] = None) -> int:
    config.ensure_directories()
    setup_logging(config.get_logging_config())
    return asyncio.run(amain(argv))

if __name__ == "__main__":
    sys.exit(main())
