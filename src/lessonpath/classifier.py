"""Tri-state unlock classification.

Only direct prerequisites are checked: a module is unlocked once every id in
its own ``prerequisites`` list has been completed. Completions are only ever
recorded for modules that were unlocked at the time, so by induction the
deeper chain is already satisfied.
"""

from __future__ import annotations

from collections.abc import Container

from .catalog import ModuleCatalog
from .logging_config import get_logger
from .models import LearningModule, ModuleStatus

logger = get_logger(__name__)


def module_status(module_id: str, catalog: ModuleCatalog, completed: Container[str]) -> ModuleStatus:
    """Classify one module as completed, unlocked, or locked.

    Ids missing from the catalog are locked. Prerequisite ids missing from
    the catalog can never be completed, so they keep their dependent locked.
    """
    module = catalog.get(module_id)
    if module is None:
        return ModuleStatus.LOCKED
    if module_id in completed:
        return ModuleStatus.COMPLETED
    for prerequisite in module.prerequisites:
        if prerequisite in completed:
            continue
        if prerequisite not in catalog:
            logger.debug(
                "Module gated by unknown prerequisite",
                extra={"module_id": module_id, "prerequisite": prerequisite},
            )
        return ModuleStatus.LOCKED
    return ModuleStatus.UNLOCKED


def is_unlocked(module_id: str, catalog: ModuleCatalog, completed: Container[str]) -> bool:
    """Return True for completed or unlocked modules."""
    return module_status(module_id, catalog, completed) is not ModuleStatus.LOCKED


def classify_all(catalog: ModuleCatalog, completed: Container[str]) -> dict[str, ModuleStatus]:
    """Return the status of every module, keyed by id in catalog order."""
    return {module.id: module_status(module.id, catalog, completed) for module in catalog}


def unlocked_modules(catalog: ModuleCatalog, completed: Container[str]) -> list[LearningModule]:
    """Modules that are not locked; completed modules are included."""
    return [module for module in catalog if is_unlocked(module.id, catalog, completed)]


def locked_modules(catalog: ModuleCatalog, completed: Container[str]) -> list[LearningModule]:
    return [module for module in catalog if not is_unlocked(module.id, catalog, completed)]


def next_available_modules(catalog: ModuleCatalog, completed: Container[str]) -> list[LearningModule]:
    """Unlocked modules that are not yet completed."""
    return [
        module
        for module in catalog
        if module_status(module.id, catalog, completed) is ModuleStatus.UNLOCKED
    ]


def missing_prerequisites(module_id: str, catalog: ModuleCatalog, completed: Container[str]) -> list[str]:
    """Direct prerequisite ids of a module that are not completed yet."""
    module = catalog.get(module_id)
    if module is None:
        return []
    return [prerequisite for prerequisite in module.prerequisites if prerequisite not in completed]
