#!/usr/bin/env python3
"""
WareFlow management CLI.

Usage:
    python manage.py serve              Start the API server
    python manage.py migrate            Apply pending database migrations
    python manage.py import FILE        Import records from .xlsx/.csv
    python manage.py export [--out DIR] Export all records
    python manage.py report TYPE [--out DIR]
                                        Write a report (inventory, low-stock, activity)
    python manage.py dashboard          Print dashboard figures
"""

import argparse
import asyncio
import subprocess
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path

from src.config import configure_logging, get_settings
from src.core.exceptions import WareFlowError

ROOT_DIR = Path(__file__).resolve().parent


def _run(command: Callable[[], Awaitable[None]]) -> None:
    """Run an async command against the store, closing the pool afterwards."""
    from src.infrastructure.storage.sqlite import close_pool

    async def runner() -> None:
        try:
            await command()
        finally:
            await close_pool()

    try:
        asyncio.run(runner())
    except WareFlowError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        sys.exit(1)


def _write(out_dir: Path, filename: str, content: bytes) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / filename
    path.write_bytes(content)
    return path


def cmd_serve(args: argparse.Namespace) -> None:
    """Start uvicorn serving the API."""
    settings = get_settings()
    host = args.host or settings.api.host
    port = args.port or settings.api.port
    uvicorn_cmd = [
        sys.executable, "-m", "uvicorn",
        "src.api.main:app",
        "--host", host,
        "--port", str(port),
    ]
    if args.reload:
        uvicorn_cmd.append("--reload")
    print(f"Starting server on {host}:{port}...")
    try:
        subprocess.run(uvicorn_cmd, cwd=str(ROOT_DIR), check=False)
    except KeyboardInterrupt:
        print("\nServer stopped.")


def cmd_migrate(args: argparse.Namespace) -> None:
    """Apply pending migrations and report their status."""
    from src.infrastructure.storage.sqlite.migrations.migrator import (
        get_migration_status,
        initialize_database,
    )

    async def migrate() -> None:
        results = await initialize_database(create_backup_before=not args.no_backup)
        for result in results:
            state = "ok" if result.success else f"FAILED ({result.error})"
            print(f"v{result.version}_{result.name}: {state} [{result.execution_time_ms} ms]")
        status = await get_migration_status()
        print(f"Applied: {', '.join(status['applied_migrations']) or '-'}")
        if status["pending_migrations"]:
            print(f"Pending: {', '.join(status['pending_migrations'])}")
        if any(not r.success for r in results):
            sys.exit(1)

    _run(migrate)


def cmd_import(args: argparse.Namespace) -> None:
    """Import a file as one batch."""
    from src.application.use_cases import ImportBatchUseCase

    path = Path(args.file)
    if not path.is_file():
        print(f"Error: no such file: {path}", file=sys.stderr)
        sys.exit(1)

    async def run_import() -> None:
        use_case = ImportBatchUseCase(validate_rows=True if args.validate else None)
        result = await use_case.execute(path.read_bytes(), path.name)
        print(f"Imported {result.imported} records ({result.total_records} in store).")

    _run(run_import)


def cmd_export(args: argparse.Namespace) -> None:
    """Export every record to a file."""
    from src.application.use_cases import ExportRecordsUseCase

    async def run_export() -> None:
        exported = await ExportRecordsUseCase().export_all()
        path = _write(Path(args.out), exported.filename, exported.content)
        print(f"Exported {exported.row_count} records to {path}")

    _run(run_export)


def cmd_report(args: argparse.Namespace) -> None:
    """Write one report to a file."""
    from src.application.use_cases import ExportRecordsUseCase

    async def run_report() -> None:
        exported = await ExportRecordsUseCase().generate_report(args.type)
        path = _write(Path(args.out), exported.filename, exported.content)
        print(f"Wrote {exported.row_count} rows to {path}")

    _run(run_report)


def cmd_dashboard(args: argparse.Namespace) -> None:
    """Print dashboard figures."""
    from src.application.use_cases import DashboardSummaryUseCase, ReportOverviewUseCase

    async def show() -> None:
        summary = await DashboardSummaryUseCase().execute()
        overview = await ReportOverviewUseCase().execute()

        print(f"Total items:     {summary.total_items}")
        print(f"Low stock:       {summary.low_stock_count}")
        print(f"Total quantity:  {summary.total_quantity}")
        print("\nLowest stock:")
        for alert in summary.top_low_stock:
            print(f"  {alert.sku:<16} {alert.name:<30} {alert.quantity}/{alert.minimum_stock}")
        print("\nRecently updated:")
        for entry in summary.top_recently_updated:
            stamp = entry.timestamp.isoformat(timespec="seconds") if entry.timestamp else "-"
            print(f"  {entry.item_name:<30} {entry.action}  {stamp}")
        print("\nCategories:")
        for stat in overview.categories:
            print(f"  {stat.name:<30} {stat.count:>6}  {stat.percentage:>5}%")

    _run(show)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="WareFlow management CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    # serve
    p_serve = sub.add_parser("serve", help="Start the API server")
    p_serve.add_argument("--host", default=None, help="Bind host (default: API_HOST)")
    p_serve.add_argument("--port", type=int, default=None, help="Bind port (default: API_PORT)")
    p_serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    p_serve.set_defaults(func=cmd_serve)

    # migrate
    p_migrate = sub.add_parser("migrate", help="Apply pending migrations")
    p_migrate.add_argument("--no-backup", action="store_true", help="Skip the pre-migration backup")
    p_migrate.set_defaults(func=cmd_migrate)

    # import
    p_import = sub.add_parser("import", help="Import records from a file")
    p_import.add_argument("file", help="Path to an .xlsx or .csv file")
    p_import.add_argument(
        "--validate",
        action="store_true",
        help="Reject the file if any row breaks a field rule",
    )
    p_import.set_defaults(func=cmd_import)

    # export
    p_export = sub.add_parser("export", help="Export all records")
    p_export.add_argument("--out", default=".", help="Output directory (default: .)")
    p_export.set_defaults(func=cmd_export)

    # report
    p_report = sub.add_parser("report", help="Write a report")
    p_report.add_argument("type", help="inventory, low-stock or activity")
    p_report.add_argument("--out", default=".", help="Output directory (default: .)")
    p_report.set_defaults(func=cmd_report)

    # dashboard
    p_dashboard = sub.add_parser("dashboard", help="Print dashboard figures")
    p_dashboard.set_defaults(func=cmd_dashboard)

    args = parser.parse_args()
    configure_logging()
    args.func(args)


if __name__ == "__main__":
    main()
