"""CLI entrypoint for inspecting module progression."""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Callable
from dataclasses import asdict
from pathlib import Path

from .config import Settings, get_settings
from .content_loader import CatalogError, load_completed_ids, load_modules, read_records
from .engine import ProgressionEngine
from .logging_config import configure_logging, get_logger
from .models import LearningModule
from .validator import validate_catalog

PrintFn = Callable[[str], None]

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_BAD_INPUT = 2


def _print_error(text: str) -> None:
    print(text, file=sys.stderr)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="lessonpath", description="Module progression and prerequisite checks")
    parser.add_argument("--catalog", type=Path, help="Catalog JSON file or directory of module files")
    parser.add_argument("--completed", type=Path, help="JSON file with completed module ids")
    parser.add_argument("--strict", action="store_true", help="Reject catalog records that fail the authoring schema")
    parser.add_argument("--json", action="store_true", dest="as_json", help="Print machine-readable JSON")
    parser.add_argument("--log-level", help="Override the configured log level")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("status", help="Show every module with its unlock status")
    commands.add_parser("next", help="Show modules available to start now")
    path_parser = commands.add_parser("path", help="Show modules to complete before a target module")
    path_parser.add_argument("module_id")
    commands.add_parser("stats", help="Show overall progression totals")
    unit_parser = commands.add_parser("unit", help="Show completion for one curriculum unit")
    unit_parser.add_argument("unit", type=int)
    commands.add_parser("validate", help="Validate catalog structure and prerequisites")
    return parser


def run(argv: list[str] | None = None, print_fn: PrintFn = print, error_fn: PrintFn = _print_error) -> int:
    """Run the CLI application."""
    args = _build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(
        log_level=args.log_level or settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )
    catalog_path: Path = args.catalog or settings.catalog_path

    try:
        if args.command == "validate":
            return _validate_flow(catalog_path, args.as_json, print_fn)
        engine = _engine(catalog_path, args.completed or settings.completed_path, args.strict, settings)
    except CatalogError as exc:
        logger.debug("Input rejected", exc_info=True)
        error_fn(f"error: {exc}")
        return EXIT_BAD_INPUT

    if args.command == "status":
        _status_flow(engine, args.as_json, print_fn)
    elif args.command == "next":
        _next_flow(engine, args.as_json, print_fn)
    elif args.command == "path":
        return _path_flow(engine, args.module_id, args.as_json, print_fn)
    elif args.command == "stats":
        _stats_flow(engine, args.as_json, print_fn)
    elif args.command == "unit":
        _unit_flow(engine, args.unit, args.as_json, print_fn)
    return EXIT_OK


def _engine(catalog_path: Path, completed_path: Path | None, strict: bool, settings: Settings) -> ProgressionEngine:
    """Load inputs and build a progression snapshot."""
    modules = load_modules(catalog_path, strict=strict or settings.strict_catalog)
    completed = load_completed_ids(completed_path) if completed_path is not None else []
    return ProgressionEngine.from_modules(modules, completed)


def _status_flow(engine: ProgressionEngine, as_json: bool, print_fn: PrintFn) -> None:
    """Print every module with status and prerequisites."""
    statuses = engine.statuses()
    if as_json:
        _print_json({module_id: status.value for module_id, status in statuses.items()}, print_fn)
        return
    if not statuses:
        print_fn("Catalog is empty.")
        return

    rows: list[tuple[str, str, str, str]] = []
    for module in engine.catalog:
        missing = set(engine.missing_prerequisites(module.id))
        if module.prerequisites:
            prerequisites = ", ".join(f"*{dep}" if dep in missing else dep for dep in module.prerequisites)
        else:
            prerequisites = "none"
        rows.append((module.id, str(module.unit), statuses[module.id].value, prerequisites))

    module_width = max(len("Module"), max(len(row[0]) for row in rows))
    unit_width = max(len("Unit"), max(len(row[1]) for row in rows))
    status_width = max(len("Status"), max(len(row[2]) for row in rows))
    header = f"{'Module':<{module_width}} {'Unit':<{unit_width}} {'Status':<{status_width}} Prerequisites"
    print_fn(header)
    print_fn("-" * len(header))
    for row in rows:
        print_fn(f"{row[0]:<{module_width}} {row[1]:<{unit_width}} {row[2]:<{status_width}} {row[3]}")
    print_fn("\n* = not completed yet")


def _next_flow(engine: ProgressionEngine, as_json: bool, print_fn: PrintFn) -> None:
    """Print modules that can be started now."""
    available = engine.next_available_modules()
    if as_json:
        _print_json([_module_dict(module) for module in available], print_fn)
        return
    if not available:
        if engine.catalog and len(engine.locked_modules()) == 0:
            print_fn("All modules completed.")
        else:
            print_fn("No modules available yet.")
        return
    print_fn("=== Next Modules ===")
    for idx, module in enumerate(available, start=1):
        marker = " (recommended)" if idx == 1 else ""
        print_fn(f"{idx}) {module.id} - {module.name or module.id}{marker}")


def _path_flow(engine: ProgressionEngine, module_id: str, as_json: bool, print_fn: PrintFn) -> int:
    """Print the ordered chain of modules needed to reach a target."""
    if engine.get_module(module_id) is None:
        if as_json:
            _print_json([], print_fn)
        else:
            print_fn(f"Module '{module_id}' is not in the catalog.")
        return EXIT_FAILED

    path = engine.progression_path(module_id)
    if as_json:
        _print_json([_module_dict(module) for module in path], print_fn)
        return EXIT_OK

    status = engine.status(module_id)
    if not path and engine.is_unlocked(module_id):
        print_fn(f"Module '{module_id}' is already {status.value}.")
        return EXIT_OK
    if not path:
        missing = ", ".join(engine.missing_prerequisites(module_id))
        print_fn(f"No available modules lead to '{module_id}'. Unsatisfiable prerequisites: {missing}")
        return EXIT_OK

    print_fn(f"=== Path to {module_id} ===")
    for idx, module in enumerate(path, start=1):
        print_fn(f"{idx}) {module.id} - {module.name or module.id} [{engine.status(module.id).value}]")
    return EXIT_OK


def _stats_flow(engine: ProgressionEngine, as_json: bool, print_fn: PrintFn) -> None:
    stats = engine.stats()
    if as_json:
        _print_json(stats.as_dict(), print_fn)
        return
    print_fn("=== Progression ===")
    print_fn(f"Total modules:     {stats.total_modules}")
    print_fn(f"Completed:         {stats.completed_modules}")
    print_fn(f"Unlocked:          {stats.unlocked_modules}")
    print_fn(f"Locked:            {stats.locked_modules}")
    print_fn(f"Completion:        {stats.completion_percentage}%")


def _unit_flow(engine: ProgressionEngine, unit: int, as_json: bool, print_fn: PrintFn) -> None:
    status = engine.unit_status(unit)
    if as_json:
        _print_json(status.as_dict(), print_fn)
        return
    print_fn(f"=== Unit {unit} ===")
    print_fn(f"Completed {status.completed}/{status.total} modules ({status.percentage}%)")
    if status.all_completed:
        print_fn("Unit complete.")
    for module in engine.unlocked_modules_by_unit(unit):
        print_fn(f"- {module.id} [{engine.status(module.id).value}]")


def _validate_flow(catalog_path: Path, as_json: bool, print_fn: PrintFn) -> int:
    """Print the authoring validation report for a catalog."""
    report = validate_catalog(read_records(catalog_path))
    if as_json:
        _print_json(report.as_dict(), print_fn)
    else:
        for error in report.errors:
            print_fn(f"ERROR: {error}")
        for warning in report.warnings:
            print_fn(f"WARNING: {warning}")
        if report.success:
            print_fn("Catalog is valid.")
        else:
            print_fn(f"Catalog has {len(report.errors)} error(s).")
    return EXIT_OK if report.success else EXIT_FAILED


def _module_dict(module: LearningModule) -> dict[str, object]:
    return asdict(module)


def _print_json(payload: object, print_fn: PrintFn) -> None:
    print_fn(json.dumps(payload, indent=2))


def main_entry() -> None:
    """Console script entrypoint."""
    raise SystemExit(run())


if __name__ == "__main__":  # pragma: no cover
    main_entry()
