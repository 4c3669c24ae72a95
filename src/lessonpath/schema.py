"""Strict authoring schema for catalog records.

The runtime engine accepts whatever the catalog fetcher hands it. This schema
is the stricter layer used by validation tooling and strict catalog loading.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .models import LearningModule

MIN_UNIT = 1
MAX_UNIT = 6

LearningMode = Literal["flashcard", "quiz", "completion", "sorting", "matching", "reading"]
DifficultyLevel = Literal["a1", "a2", "b1", "b2", "c1", "c2"]


class ModuleRecord(BaseModel):
    """One catalog record as authored in ``learningModules.json``."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    unit: int = Field(ge=MIN_UNIT, le=MAX_UNIT)
    learning_mode: LearningMode = Field(alias="learningMode")
    level: list[DifficultyLevel]
    category: str = Field(min_length=1)
    prerequisites: list[str]
    description: str = ""
    estimated_time: int | None = Field(default=None, alias="estimatedTime", ge=0)
    difficulty: int | None = None
    data_path: str | None = Field(default=None, alias="dataPath")
    tags: list[str] = []

    @field_validator("level", mode="before")
    @classmethod
    def _single_level_as_list(cls, value: object) -> object:
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("prerequisites")
    @classmethod
    def _no_blank_prerequisites(cls, value: list[str]) -> list[str]:
        if any(not item.strip() for item in value):
            raise ValueError("prerequisite ids must be non-empty strings")
        return value

    def to_module(self) -> LearningModule:
        """Convert to the runtime module type."""
        return LearningModule(
            id=self.id,
            unit=self.unit,
            prerequisites=tuple(self.prerequisites),
            name=self.name,
            description=self.description,
            learning_mode=self.learning_mode,
            level=tuple(self.level),
            category=self.category,
            estimated_time=self.estimated_time,
            difficulty=self.difficulty,
            data_path=self.data_path,
            tags=tuple(self.tags),
        )


def format_validation_errors(exc: ValidationError) -> list[str]:
    """Flatten pydantic errors to ``"field: message"`` strings."""
    messages: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "record"
        messages.append(f"{location}: {error['msg']}")
    return messages
