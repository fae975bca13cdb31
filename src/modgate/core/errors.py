"""Exceptions raised by the admission core."""

from __future__ import annotations

from typing import Iterable


class InvalidCriterionArgument(ValueError):
    """Raised when a criterion is constructed without a usable predicate."""

    def __init__(self, argument: str, reason: str = "must be a callable"):
        super().__init__(f"{argument} {reason}")
        self.argument = argument


class ComplaintQualityError(ValueError):
    """Raised when a default complaint set is empty or contains blank entries."""


class ModuleExitError(RuntimeError):
    """A candidate module called ``sys.exit`` while being loaded."""

    def __init__(self, module_name: str, code: object):
        super().__init__(f"{module_name!r} exited during import with status {code!r}")
        self.module_name = module_name
        self.code = code


class TypeEnumerationError(Exception):
    """Raised when some exported types of a module could not be resolved.

    ``loader_errors`` holds one sub-fault per export that failed to load, in
    the order they were encountered. ``types`` holds whatever did resolve.
    """

    def __init__(
        self,
        module_name: str,
        loader_errors: Iterable[Exception],
        types: Iterable[type] = (),
    ):
        self.module_name = module_name
        self.loader_errors = list(loader_errors)
        self.types = list(types)
        super().__init__(
            f"Unable to load one or more exported types of {module_name!r} "
            f"({len(self.loader_errors)} failure(s))"
        )

    def flatten(self) -> ExceptionGroup:
        """Collapse nested sub-faults into a single ``ExceptionGroup``."""
        leaves = list(_iter_leaves(self.loader_errors)) or [Exception(str(self))]
        return ExceptionGroup(f"Type enumeration failed for {self.module_name!r}", leaves)


def _iter_leaves(errors: Iterable[Exception]):
    for error in errors:
        if isinstance(error, TypeEnumerationError):
            yield from _iter_leaves(error.loader_errors)
        elif isinstance(error, ExceptionGroup):
            yield from _iter_leaves(error.exceptions)
        else:
            yield error


__all__ = [
    "ComplaintQualityError",
    "InvalidCriterionArgument",
    "ModuleExitError",
    "TypeEnumerationError",
]
