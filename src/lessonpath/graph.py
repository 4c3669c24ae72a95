"""Direct prerequisite edges and their reverse index."""

from __future__ import annotations

from .catalog import ModuleCatalog


class PrerequisiteGraph:
    """Prerequisite edges derived from a catalog.

    Edges are taken verbatim from each module; ids that do not resolve in
    the catalog are kept as-is.
    """

    __slots__ = ("_catalog", "_dependents")

    def __init__(self, catalog: ModuleCatalog) -> None:
        self._catalog = catalog
        self._dependents: dict[str, frozenset[str]] | None = None

    @property
    def catalog(self) -> ModuleCatalog:
        return self._catalog

    def prerequisites_of(self, module_id: str) -> tuple[str, ...]:
        """Direct prerequisite ids of a module; empty for unknown ids."""
        module = self._catalog.get(module_id)
        if module is None:
            return ()
        return module.prerequisites

    def dependents_of(self, module_id: str) -> frozenset[str]:
        """Ids of modules that list ``module_id`` as a direct prerequisite."""
        if self._dependents is None:
            self._dependents = self._build_reverse_index()
        return self._dependents.get(module_id, frozenset())

    def _build_reverse_index(self) -> dict[str, frozenset[str]]:
        reverse: dict[str, set[str]] = {}
        for module in self._catalog:
            for prerequisite in module.prerequisites:
                reverse.setdefault(prerequisite, set()).add(module.id)
        return {key: frozenset(value) for key, value in reverse.items()}
