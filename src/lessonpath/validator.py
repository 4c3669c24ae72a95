"""Advisory catalog validation for authoring and CI tooling.

Nothing here is called by the runtime classifier: a dangling or cyclic
prerequisite only ever makes the engine more conservative, while these
checks turn it into a readable diagnostic.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence

from pydantic import ValidationError

from .catalog import ModuleCatalog
from .content_loader import module_from_dict
from .models import LearningModule, ValidationResult
from .schema import ModuleRecord, format_validation_errors


def validate_prerequisites(modules: Iterable[LearningModule]) -> ValidationResult:
    """Report prerequisite ids that do not name a module in the list."""
    modules = list(modules)
    known = {module.id for module in modules}
    errors: list[str] = []
    for module in modules:
        for prerequisite in module.prerequisites:
            if prerequisite not in known:
                errors.append(f"Module '{module.id}' has invalid prerequisite '{prerequisite}' - module not found")
    return ValidationResult.from_messages(errors)


def find_prerequisite_cycles(modules: Iterable[LearningModule]) -> list[tuple[str, ...]]:
    """Return each prerequisite cycle as a closed id chain, e.g. ``("a", "b", "a")``.

    Ids that do not resolve in the catalog are ignored.
    """
    prerequisites = {module.id: module.prerequisites for module in ModuleCatalog.build(modules)}
    visiting: set[str] = set()
    visited: set[str] = set()
    cycles: list[tuple[str, ...]] = []

    for root in prerequisites:
        if root in visited:
            continue
        path: list[str] = [root]
        visiting.add(root)
        stack: list[Iterator[str]] = [iter(prerequisites[root])]
        while stack:
            for prerequisite in stack[-1]:
                if prerequisite in visited or prerequisite not in prerequisites:
                    continue
                if prerequisite in visiting:
                    cycle_start = path.index(prerequisite)
                    cycles.append(tuple(path[cycle_start:]) + (prerequisite,))
                    continue
                visiting.add(prerequisite)
                path.append(prerequisite)
                stack.append(iter(prerequisites[prerequisite]))
                break
            else:
                stack.pop()
                finished = path.pop()
                visiting.discard(finished)
                visited.add(finished)
    return cycles


def validate_prerequisite_graph(modules: Iterable[LearningModule]) -> ValidationResult:
    """Dangling-reference check plus one error per prerequisite cycle."""
    modules = list(modules)
    errors = list(validate_prerequisites(modules).errors)
    for cycle in find_prerequisite_cycles(modules):
        errors.append(f"Circular prerequisite chain: {' -> '.join(cycle)}")
    return ValidationResult.from_messages(errors)


def validate_module(raw: Mapping[str, object]) -> ValidationResult:
    """Check one raw catalog record against the authoring schema."""
    try:
        ModuleRecord.model_validate(raw)
    except ValidationError as exc:
        return ValidationResult.from_messages(format_validation_errors(exc))
    return ValidationResult.from_messages([])


def validate_catalog(raw_records: Sequence[object]) -> ValidationResult:
    """Full authoring report for a raw catalog payload.

    Structure errors are reported per record, duplicate ids are warnings
    (the later record wins at runtime), and the prerequisite graph is checked
    for dangling references and cycles.
    """
    errors: list[str] = []
    warnings: list[str] = []
    modules: list[LearningModule] = []
    seen: set[str] = set()

    for index, raw in enumerate(raw_records):
        if not isinstance(raw, Mapping):
            errors.append(f"Record #{index}: must be a JSON object")
            continue
        label = str(raw.get("id") or f"#{index}")
        for message in validate_module(raw).errors:
            errors.append(f"Module '{label}': {message}")

        module = module_from_dict(raw)
        if module is None:
            continue
        if module.id in seen:
            warnings.append(f"Duplicate module id '{module.id}' - later record replaces earlier one")
        seen.add(module.id)
        modules.append(module)

    errors.extend(validate_prerequisite_graph(modules).errors)
    return ValidationResult.from_messages(errors, warnings)

