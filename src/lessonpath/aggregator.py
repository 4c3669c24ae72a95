"""Catalog-wide and per-unit completion statistics."""

from __future__ import annotations

from collections.abc import Container

from .catalog import ModuleCatalog
from .classifier import module_status
from .models import ModuleStatus, ProgressionStats, UnitCompletionStatus


def _percentage(part: int, whole: int) -> int:
    """Whole-number percentage, rounding halves up; 0 for an empty whole."""
    if whole == 0:
        return 0
    return (part * 200 + whole) // (whole * 2)


def progression_stats(catalog: ModuleCatalog, completed: Container[str]) -> ProgressionStats:
    """Tally statuses in one pass over the catalog.

    ``unlocked_modules`` counts completed modules too, matching the unlocked
    module listing.
    """
    counts = {status: 0 for status in ModuleStatus}
    for module in catalog:
        counts[module_status(module.id, catalog, completed)] += 1

    total = len(catalog)
    done = counts[ModuleStatus.COMPLETED]
    return ProgressionStats(
        total_modules=total,
        completed_modules=done,
        unlocked_modules=done + counts[ModuleStatus.UNLOCKED],
        locked_modules=counts[ModuleStatus.LOCKED],
        completion_percentage=_percentage(done, total),
    )


def unit_completion_status(unit: int, catalog: ModuleCatalog, completed: Container[str]) -> UnitCompletionStatus:
    """Completion totals for modules in one curriculum unit."""
    total = 0
    done = 0
    for module in catalog:
        if module.unit != unit:
            continue
        total += 1
        if module_status(module.id, catalog, completed) is ModuleStatus.COMPLETED:
            done += 1
    return UnitCompletionStatus(
        total=total,
        completed=done,
        percentage=_percentage(done, total),
        all_completed=total > 0 and done == total,
    )
