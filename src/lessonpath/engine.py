"""Immutable progression snapshot over one (catalog, completed ids) pair."""

from __future__ import annotations

from collections.abc import Iterable

from . import aggregator, classifier, paths
from .catalog import ModuleCatalog
from .graph import PrerequisiteGraph
from .ledger import CompletionLedger
from .models import LearningModule, ModuleStatus, ProgressionStats, UnitCompletionStatus


class ProgressionEngine:
    """Answer progression queries for one catalog and one set of completions.

    A snapshot never changes after construction. When the learner completes a
    module, build a new snapshot with ``with_completed``; when the catalog is
    refreshed, build a new one with ``from_modules``. Every query is a pure
    function of the snapshot and never raises for unknown module ids.
    """

    __slots__ = ("_catalog", "_ledger", "_graph")

    def __init__(
        self, catalog: ModuleCatalog, ledger: CompletionLedger, graph: PrerequisiteGraph | None = None
    ) -> None:
        self._catalog = catalog
        self._ledger = ledger
        self._graph = graph if graph is not None else PrerequisiteGraph(catalog)

    @classmethod
    def from_modules(cls, modules: Iterable[LearningModule], completed_ids: Iterable[str] = ()) -> ProgressionEngine:
        """Build a snapshot from the fetched module list and completed ids."""
        return cls(ModuleCatalog.build(modules), CompletionLedger(completed_ids))

    def with_completed(self, completed_ids: Iterable[str]) -> ProgressionEngine:
        """Return a snapshot over the same catalog with a new completion set."""
        return ProgressionEngine(self._catalog, CompletionLedger(completed_ids), self._graph)

    @property
    def catalog(self) -> ModuleCatalog:
        return self._catalog

    @property
    def ledger(self) -> CompletionLedger:
        return self._ledger

    @property
    def graph(self) -> PrerequisiteGraph:
        return self._graph

    def get_module(self, module_id: str) -> LearningModule | None:
        return self._catalog.get(module_id)

    # Classification

    def status(self, module_id: str) -> ModuleStatus:
        return classifier.module_status(module_id, self._catalog, self._ledger)

    def statuses(self) -> dict[str, ModuleStatus]:
        return classifier.classify_all(self._catalog, self._ledger)

    def is_unlocked(self, module_id: str) -> bool:
        return classifier.is_unlocked(module_id, self._catalog, self._ledger)

    def can_access(self, module_id: str) -> bool:
        return self.is_unlocked(module_id)

    def unlocked_modules(self) -> list[LearningModule]:
        return classifier.unlocked_modules(self._catalog, self._ledger)

    def locked_modules(self) -> list[LearningModule]:
        return classifier.locked_modules(self._catalog, self._ledger)

    def next_available_modules(self) -> list[LearningModule]:
        return classifier.next_available_modules(self._catalog, self._ledger)

    def next_recommended_module(self) -> LearningModule | None:
        available = self.next_available_modules()
        return available[0] if available else None

    # Prerequisites

    def prerequisites_of(self, module_id: str) -> tuple[str, ...]:
        return self._graph.prerequisites_of(module_id)

    def dependents_of(self, module_id: str) -> frozenset[str]:
        return self._graph.dependents_of(module_id)

    def module_prerequisites(self, module_id: str) -> list[LearningModule]:
        """Direct prerequisites that resolve in the catalog, in declared order."""
        resolved = (self._catalog.get(item) for item in self._graph.prerequisites_of(module_id))
        return [module for module in resolved if module is not None]

    def missing_prerequisites(self, module_id: str) -> list[str]:
        return classifier.missing_prerequisites(module_id, self._catalog, self._ledger)

    def progression_path(self, module_id: str) -> list[LearningModule]:
        return paths.progression_path(module_id, self._catalog, self._ledger)

    # Units and totals

    def modules_by_unit(self, unit: int) -> list[LearningModule]:
        return [module for module in self._catalog if module.unit == unit]

    def unlocked_modules_by_unit(self, unit: int) -> list[LearningModule]:
        return [module for module in self.modules_by_unit(unit) if self.is_unlocked(module.id)]

    def stats(self) -> ProgressionStats:
        return aggregator.progression_stats(self._catalog, self._ledger)

    def unit_status(self, unit: int) -> UnitCompletionStatus:
        return aggregator.unit_completion_status(unit, self._catalog, self._ledger)

    def __repr__(self) -> str:
        return f"ProgressionEngine(modules={len(self._catalog)}, completed={len(self._ledger)})"
