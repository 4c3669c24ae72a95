import json
from dataclasses import asdict

from lessonpath import ModuleStatus, ProgressionEngine
from lessonpath.models import LearningModule


def _module(module_id: str, *prerequisites: str, unit: int = 1) -> LearningModule:
    return LearningModule(id=module_id, unit=unit, prerequisites=tuple(prerequisites), name=module_id.title())


MODULES = [
    _module("flashcard-basic-vocabulary-a1", unit=1),
    _module("matching-basic-grammar-a1", "flashcard-basic-vocabulary-a1", unit=1),
    _module("flashcard-family-a2", "matching-basic-grammar-a1", unit=2),
]


def test_engine_queries_for_one_completion() -> None:
    engine = ProgressionEngine.from_modules(MODULES, ["flashcard-basic-vocabulary-a1"])
    assert engine.status("flashcard-basic-vocabulary-a1") is ModuleStatus.COMPLETED
    assert engine.status("matching-basic-grammar-a1") is ModuleStatus.UNLOCKED
    assert engine.status("flashcard-family-a2") is ModuleStatus.LOCKED
    assert len(engine.unlocked_modules()) == 2
    assert len(engine.locked_modules()) == 1
    assert [module.id for module in engine.next_available_modules()] == ["matching-basic-grammar-a1"]
    assert engine.stats().completion_percentage == 33
    assert engine.can_access("flashcard-basic-vocabulary-a1") is True
    assert engine.is_unlocked("flashcard-family-a2") is False


def test_next_recommended_module() -> None:
    engine = ProgressionEngine.from_modules(MODULES, ["flashcard-basic-vocabulary-a1"])
    recommended = engine.next_recommended_module()
    assert recommended is not None
    assert recommended.id == "matching-basic-grammar-a1"

    finished = engine.with_completed(module.id for module in MODULES)
    assert finished.next_recommended_module() is None


def test_with_completed_leaves_original_snapshot_untouched() -> None:
    engine = ProgressionEngine.from_modules(MODULES)
    later = engine.with_completed(["flashcard-basic-vocabulary-a1", "matching-basic-grammar-a1"])
    assert engine.status("flashcard-family-a2") is ModuleStatus.LOCKED
    assert later.status("flashcard-family-a2") is ModuleStatus.UNLOCKED
    assert later.catalog is engine.catalog
    assert later.graph is engine.graph


def test_unit_queries() -> None:
    engine = ProgressionEngine.from_modules(MODULES, ["flashcard-basic-vocabulary-a1"])
    assert [module.id for module in engine.modules_by_unit(1)] == [
        "flashcard-basic-vocabulary-a1",
        "matching-basic-grammar-a1",
    ]
    assert len(engine.unlocked_modules_by_unit(1)) == 2
    assert engine.unlocked_modules_by_unit(2) == []
    assert engine.unit_status(1).as_dict() == {"total": 2, "completed": 1, "percentage": 50, "allCompleted": False}
    assert engine.modules_by_unit(5) == []


def test_prerequisite_queries() -> None:
    modules = MODULES + [_module("orphan", "ghost", "flashcard-basic-vocabulary-a1")]
    engine = ProgressionEngine.from_modules(modules)
    assert [module.id for module in engine.module_prerequisites("orphan")] == ["flashcard-basic-vocabulary-a1"]
    assert engine.missing_prerequisites("orphan") == ["ghost", "flashcard-basic-vocabulary-a1"]
    assert engine.prerequisites_of("orphan") == ("ghost", "flashcard-basic-vocabulary-a1")
    assert engine.dependents_of("flashcard-basic-vocabulary-a1") == frozenset({"matching-basic-grammar-a1", "orphan"})
    assert [module.id for module in engine.progression_path("flashcard-family-a2")] == [
        "flashcard-basic-vocabulary-a1",
        "matching-basic-grammar-a1",
    ]


def test_unknown_ids_never_raise() -> None:
    engine = ProgressionEngine.from_modules(MODULES)
    assert engine.get_module("nope") is None
    assert engine.status("nope") is ModuleStatus.LOCKED
    assert engine.is_unlocked("nope") is False
    assert engine.module_prerequisites("nope") == []
    assert engine.missing_prerequisites("nope") == []
    assert engine.progression_path("nope") == []
    assert engine.dependents_of("nope") == frozenset()


def test_dangling_prerequisite_scenario() -> None:
    engine = ProgressionEngine.from_modules([_module("d", "ghost")])
    assert engine.status("d") is ModuleStatus.LOCKED
    assert engine.progression_path("d") == []


def test_empty_engine() -> None:
    engine = ProgressionEngine.from_modules([])
    assert engine.stats().as_dict()["completionPercentage"] == 0
    assert engine.next_recommended_module() is None
    assert engine.unlocked_modules() == []


def test_outputs_are_plain_data() -> None:
    engine = ProgressionEngine.from_modules(MODULES, ["flashcard-basic-vocabulary-a1"])
    payload = {
        "stats": engine.stats().as_dict(),
        "unit": engine.unit_status(1).as_dict(),
        "statuses": {key: value.value for key, value in engine.statuses().items()},
        "path": [asdict(module) for module in engine.progression_path("flashcard-family-a2")],
    }
    decoded = json.loads(json.dumps(payload))
    assert decoded["statuses"]["flashcard-family-a2"] == "locked"
    assert decoded["path"][0]["id"] == "matching-basic-grammar-a1"


def test_queries_are_repeatable() -> None:
    engine = ProgressionEngine.from_modules(MODULES, ["flashcard-basic-vocabulary-a1"])
    assert engine.statuses() == engine.statuses()
    assert engine.stats() == engine.stats()
    assert engine.progression_path("flashcard-family-a2") == engine.progression_path("flashcard-family-a2")
