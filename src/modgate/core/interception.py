"""Classification of partial type-loading faults."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import TypeEnumerationError

DEPENDENCY_COMPLAINT = "A module dependency {name!r} could not be loaded: {message}"


@dataclass(frozen=True, slots=True)
class Classified:
    """Every sub-fault was a missing or unloadable dependency."""

    complaints: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Unclassified:
    """At least one sub-fault did not look like a dependency problem."""

    fault: Exception


InterceptionOutcome = Classified | Unclassified


def dependency_identifier(fault: BaseException) -> str | None:
    """Return the dependency a loader fault complains about, if it names one."""
    if isinstance(fault, ImportError):
        return fault.name or fault.path
    if isinstance(fault, OSError):
        filename = fault.filename
        return None if filename is None else str(filename)
    return None


def intercept_partial_load(fault: TypeEnumerationError) -> InterceptionOutcome:
    """Downgrade ``fault`` to complaints when it only reports broken dependencies.

    Repeated faults about the same dependency keep the first message only.
    """
    bad_files: dict[str, str] = {}
    for sub_fault in fault.loader_errors:
        name = dependency_identifier(sub_fault)
        if name is None:
            return Unclassified(fault=sub_fault)
        # first entry usually carries the most specific message
        bad_files.setdefault(name, str(sub_fault))

    return Classified(
        complaints=tuple(
            DEPENDENCY_COMPLAINT.format(name=name, message=message)
            for name, message in bad_files.items()
        )
    )


__all__ = [
    "Classified",
    "DEPENDENCY_COMPLAINT",
    "InterceptionOutcome",
    "Unclassified",
    "dependency_identifier",
    "intercept_partial_load",
]
