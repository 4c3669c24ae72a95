"""Ordered chain of outstanding prerequisites needed to reach a module."""

from __future__ import annotations

from collections.abc import Container, Iterator

from .catalog import ModuleCatalog
from .logging_config import get_logger
from .models import LearningModule

logger = get_logger(__name__)


def progression_path(module_id: str, catalog: ModuleCatalog, completed: Container[str]) -> list[LearningModule]:
    """Return the not-yet-completed modules that gate ``module_id``.

    Modules come out dependencies-first, so completing them in order is
    enough to unlock the target. Each module appears once even when several
    routes lead to it. The target itself, completed modules, and ids missing
    from the catalog are left out. A prerequisite that is already on the
    current route closes a cycle; it is skipped rather than descended into.
    """
    target = catalog.get(module_id)
    if target is None:
        return []

    order: list[LearningModule] = []
    visiting: set[str] = {module_id}
    visited: set[str] = set()
    stack: list[tuple[LearningModule, Iterator[str]]] = [(target, iter(target.prerequisites))]

    while stack:
        current, pending = stack[-1]
        for prerequisite in pending:
            if prerequisite in visited or prerequisite in completed:
                continue
            if prerequisite in visiting:
                logger.debug(
                    "Prerequisite cycle truncated",
                    extra={"module_id": current.id, "prerequisite": prerequisite},
                )
                continue
            module = catalog.get(prerequisite)
            if module is None:
                logger.debug(
                    "Unknown prerequisite left out of path",
                    extra={"module_id": current.id, "prerequisite": prerequisite},
                )
                visited.add(prerequisite)
                continue
            visiting.add(prerequisite)
            stack.append((module, iter(module.prerequisites)))
            break
        else:
            stack.pop()
            visiting.discard(current.id)
            visited.add(current.id)
            if current.id != module_id:
                order.append(current)

    return order
