"""Id-keyed index over the module list supplied by the catalog fetcher."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .logging_config import get_logger
from .models import LearningModule

logger = get_logger(__name__)


class ModuleCatalog:
    """Immutable id -> module mapping.

    Iteration follows the order in which ids were first seen. When an id
    occurs more than once the last record wins.
    """

    __slots__ = ("_modules",)

    def __init__(self, modules: dict[str, LearningModule] | None = None) -> None:
        self._modules: dict[str, LearningModule] = dict(modules or {})

    @classmethod
    def build(cls, modules: Iterable[LearningModule]) -> ModuleCatalog:
        """Index a module sequence by id."""
        indexed: dict[str, LearningModule] = {}
        for module in modules:
            if module.id in indexed:
                logger.debug("Duplicate module id replaced by later record", extra={"module_id": module.id})
            indexed[module.id] = module
        return cls(indexed)

    def get(self, module_id: str) -> LearningModule | None:
        """Return the module for an id, or None when absent."""
        return self._modules.get(module_id)

    def ids(self) -> tuple[str, ...]:
        """Return module ids in catalog order."""
        return tuple(self._modules)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._modules

    def __iter__(self) -> Iterator[LearningModule]:
        return iter(self._modules.values())

    def __len__(self) -> int:
        return len(self._modules)

    def __repr__(self) -> str:
        return f"ModuleCatalog({len(self._modules)} modules)"
