"""Load module catalogs and completed-module ids from JSON files."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .logging_config import get_logger
from .models import LearningModule
from .schema import ModuleRecord, format_validation_errors

logger = get_logger(__name__)


class CatalogError(ValueError):
    """Raised when a catalog or ledger file cannot be used."""


def module_from_dict(raw: Mapping[str, Any]) -> LearningModule | None:
    """Build a module from a raw catalog record without rejecting odd data.

    Out-of-range units and unknown prerequisite ids are kept as-is. Records
    without a usable id are skipped.
    """
    module_id = str(raw.get("id") or "").strip()
    if not module_id:
        logger.warning("Skipping catalog record without id", extra={"record_keys": sorted(map(str, raw))})
        return None

    raw_prerequisites = raw.get("prerequisites", [])
    if not isinstance(raw_prerequisites, list):
        raw_prerequisites = []
    raw_level = raw.get("level", [])
    if isinstance(raw_level, str):
        raw_level = [raw_level]
    elif not isinstance(raw_level, list):
        raw_level = []
    raw_tags = raw.get("tags", [])
    if not isinstance(raw_tags, list):
        raw_tags = []
    data_path = _first_present(raw, "dataPath", "data_path")

    return LearningModule(
        id=module_id,
        unit=_coerce_int(raw.get("unit"), default=0),
        prerequisites=tuple(str(item) for item in raw_prerequisites),
        name=str(raw.get("name", "")),
        description=str(raw.get("description", "")),
        learning_mode=str(_first_present(raw, "learningMode", "learning_mode") or ""),
        level=tuple(str(item) for item in raw_level),
        category=str(raw.get("category", "")),
        estimated_time=_coerce_int(_first_present(raw, "estimatedTime", "estimated_time")),
        difficulty=_coerce_int(raw.get("difficulty")),
        data_path=None if data_path is None else str(data_path),
        tags=tuple(str(item) for item in raw_tags),
    )


def modules_from_records(records: list[Any], *, strict: bool = False) -> list[LearningModule]:
    """Convert raw records, in order, to modules.

    In strict mode every record must satisfy the authoring schema; all
    problems are collected into one ``CatalogError``.
    """
    if strict:
        return _strict_modules(records)

    modules: list[LearningModule] = []
    for raw in records:
        if not isinstance(raw, Mapping):
            logger.warning("Skipping non-object catalog record", extra={"record_type": type(raw).__name__})
            continue
        module = module_from_dict(raw)
        if module is not None:
            modules.append(module)
    return modules


def read_catalog_records(path: Path) -> list[Any]:
    """Read the raw record list from a catalog file.

    The file holds either a JSON list of records or an object with a
    ``modules`` list.
    """
    payload = _read_json(path)
    if isinstance(payload, Mapping):
        payload = payload.get("modules")
    if not isinstance(payload, list):
        raise CatalogError(f"Catalog file '{path}' must contain a JSON list of modules.")
    return payload


def load_catalog(path: Path, *, strict: bool = False) -> list[LearningModule]:
    """Load modules from one catalog file."""
    modules = modules_from_records(read_catalog_records(path), strict=strict)
    logger.info("Loaded module catalog", extra={"path": str(path), "module_count": len(modules)})
    return modules


def read_catalog_dir_records(path: Path) -> list[Any]:
    """Read raw records from every ``*.json`` file in a directory, sorted by file name.

    Each file holds a single record, a list of records, or a ``modules``
    object.
    """
    if not path.is_dir():
        raise CatalogError(f"Catalog directory '{path}' does not exist.")
    records: list[Any] = []
    for file_path in sorted(path.glob("*.json")):
        payload = _read_json(file_path)
        if isinstance(payload, Mapping) and "modules" not in payload:
            records.append(payload)
        else:
            records.extend(read_catalog_records(file_path))
    return records


def load_catalog_dir(path: Path, *, strict: bool = False) -> list[LearningModule]:
    """Load modules from a directory of catalog files."""
    modules = modules_from_records(read_catalog_dir_records(path), strict=strict)
    logger.info("Loaded module catalog directory", extra={"path": str(path), "module_count": len(modules)})
    return modules


def read_records(path: Path) -> list[Any]:
    """Read raw records from a catalog file or a catalog directory."""
    if path.is_dir():
        return read_catalog_dir_records(path)
    return read_catalog_records(path)


def load_modules(path: Path, *, strict: bool = False) -> list[LearningModule]:
    """Load modules from a catalog file or a catalog directory."""
    if path.is_dir():
        return load_catalog_dir(path, strict=strict)
    return load_catalog(path, strict=strict)


def load_completed_ids(path: Path) -> list[str]:
    """Load completed module ids from a progress export.

    Accepts a JSON list of ids or an object with a ``completedModules`` list.
    """
    payload = _read_json(path)
    if isinstance(payload, Mapping):
        payload = payload.get("completedModules")
    if not isinstance(payload, list):
        raise CatalogError(f"Completion file '{path}' must contain a JSON list of module ids.")
    return [str(item) for item in payload if str(item).strip()]


def _strict_modules(records: list[Any]) -> list[LearningModule]:
    modules: list[LearningModule] = []
    problems: list[str] = []
    for index, raw in enumerate(records):
        try:
            record = ModuleRecord.model_validate(raw)
        except ValidationError as exc:
            label = raw.get("id") if isinstance(raw, Mapping) else None
            prefix = f"Module '{label}'" if label else f"Record #{index}"
            problems.extend(f"{prefix}: {message}" for message in format_validation_errors(exc))
            continue
        modules.append(record.to_module())
    if problems:
        raise CatalogError("Invalid catalog records:\n" + "\n".join(problems))
    return modules


def _read_json(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as exc:
        raise CatalogError(f"File not found: {path}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Invalid JSON in '{path}': {exc.msg} (line {exc.lineno})") from exc


def _first_present(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in raw and raw[key] is not None:
            return raw[key]
    return None


def _coerce_int(value: object, default: int | None = None) -> int | None:
    """Convert a loosely typed JSON value to int, or return ``default``."""
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else default
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return default
    return default
