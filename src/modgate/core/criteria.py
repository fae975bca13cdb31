"""Stock admission criteria."""

from __future__ import annotations

import fnmatch
import inspect
from pathlib import Path
from typing import Any, Iterable

from .criterion import Criterion, Verdict
from .errors import InvalidCriterionArgument


def subclass_of(
    base: type,
    *,
    include_abstract: bool = False,
    complaints: str | Iterable[str] | None = None,
) -> Criterion:
    """Admit modules exporting a subclass of ``base``."""
    if not isinstance(base, type):
        raise InvalidCriterionArgument("base", "must be a class")

    def is_subclass(candidate: type) -> Verdict:
        if candidate is base or not issubclass(candidate, base):
            return False, None
        if inspect.isabstract(candidate) and not include_abstract:
            return False, [f"{candidate.__qualname__} is abstract."]
        return True, None

    return Criterion.from_type_predicate(
        is_subclass,
        complaints or f"No exported class derives from {base.__module__}.{base.__qualname__}.",
        name=f"subclass_of:{base.__qualname__}",
    )


def has_attributes(*names: str, complaints: str | Iterable[str] | None = None) -> Criterion:
    """Admit modules exporting a class that provides every attribute in ``names``."""
    if not names:
        raise InvalidCriterionArgument("names", "must not be empty")
    required = tuple(names)

    def provides_all(candidate: type) -> Verdict:
        missing = [attr for attr in required if not hasattr(candidate, attr)]
        if not missing:
            return True, None
        if len(missing) == len(required):
            return False, None
        return False, [f"{candidate.__qualname__} is missing {', '.join(missing)}."]

    return Criterion.from_type_predicate(
        provides_all,
        complaints or f"No exported class provides {', '.join(required)}.",
        name=f"has_attributes:{','.join(required)}",
    )


def exports_any_class(complaints: str | Iterable[str] | None = None) -> Criterion:
    """Admit any module that exports at least one class."""

    def any_class(candidate: type) -> Verdict:
        return True, None

    return Criterion.from_type_predicate(
        any_class,
        complaints or "Module exports no classes.",
        name="exports_any_class",
    )


def exclude_names(patterns: Iterable[str]) -> Criterion:
    """Reject modules whose file name matches any of ``patterns``."""
    compiled = tuple(patterns)

    def not_excluded(module: Any) -> Verdict:
        filename = Path(str(getattr(module, "path", module.name))).name
        for pattern in compiled:
            if fnmatch.fnmatch(filename, pattern):
                return False, [f"{filename} matches excluded pattern {pattern!r}."]
        return True, None

    return Criterion.from_module_predicate(not_excluded, name="exclude_names")


__all__ = ["exclude_names", "exports_any_class", "has_attributes", "subclass_of"]
