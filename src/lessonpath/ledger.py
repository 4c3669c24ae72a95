"""Read-only view over the externally owned set of completed module ids."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class CompletionLedger:
    """Snapshot of completed module ids.

    The progress store owns the real ledger; this view copies its ids once
    and never changes afterwards.
    """

    __slots__ = ("_ids",)

    def __init__(self, completed_ids: Iterable[str] = ()) -> None:
        self._ids = frozenset(str(item) for item in completed_ids)

    @property
    def ids(self) -> frozenset[str]:
        return self._ids

    def is_completed(self, module_id: str) -> bool:
        return module_id in self._ids

    def all_completed(self, module_ids: Iterable[str]) -> bool:
        """Return True when every id is completed (vacuously True when empty)."""
        return all(module_id in self._ids for module_id in module_ids)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._ids))

    def __len__(self) -> int:
        return len(self._ids)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CompletionLedger):
            return NotImplemented
        return self._ids == other._ids

    def __hash__(self) -> int:
        return hash(self._ids)

    def __repr__(self) -> str:
        return f"CompletionLedger({sorted(self._ids)!r})"
