"""Core domain models for module progression."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class LearningModule:
    """One learning module (exercise set) in the catalog."""

    id: str
    unit: int
    prerequisites: tuple[str, ...] = ()
    name: str = ""
    description: str = ""
    learning_mode: str = ""
    level: tuple[str, ...] = ()
    category: str = ""
    estimated_time: int | None = None
    difficulty: int | None = None
    data_path: str | None = None
    tags: tuple[str, ...] = ()


class ModuleStatus(str, Enum):
    """Tri-state unlock classification of a module."""

    LOCKED = "locked"
    UNLOCKED = "unlocked"
    COMPLETED = "completed"

    @property
    def rank(self) -> int:
        """Ordering used when comparing how far a module has progressed."""
        return _STATUS_RANK[self]


_STATUS_RANK = {ModuleStatus.LOCKED: 0, ModuleStatus.UNLOCKED: 1, ModuleStatus.COMPLETED: 2}


@dataclass(frozen=True)
class ProgressionStats:
    """Catalog-wide progression totals."""

    total_modules: int
    completed_modules: int
    unlocked_modules: int
    locked_modules: int
    completion_percentage: int

    def as_dict(self) -> dict[str, int]:
        return {
            "totalModules": self.total_modules,
            "completedModules": self.completed_modules,
            "unlockedModules": self.unlocked_modules,
            "lockedModules": self.locked_modules,
            "completionPercentage": self.completion_percentage,
        }


@dataclass(frozen=True)
class UnitCompletionStatus:
    """Completion totals for one curriculum unit."""

    total: int
    completed: int
    percentage: int
    all_completed: bool

    def as_dict(self) -> dict[str, int | bool]:
        return {
            "total": self.total,
            "completed": self.completed,
            "percentage": self.percentage,
            "allCompleted": self.all_completed,
        }


@dataclass(frozen=True)
class ValidationResult:
    """Advisory validation report."""

    success: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @classmethod
    def from_messages(cls, errors: list[str], warnings: list[str] | None = None) -> ValidationResult:
        """Build a report whose success flag follows the error list."""
        return cls(success=not errors, errors=tuple(errors), warnings=tuple(warnings or ()))

    def as_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"success": self.success, "errors": list(self.errors)}
        if self.warnings:
            payload["warnings"] = list(self.warnings)
        return payload
