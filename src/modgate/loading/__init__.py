"""Candidate module handles."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .candidate import CandidateModule


@runtime_checkable
class ModuleHandle(Protocol):
    """Loadable unit of code inspected by admission criteria.

    ``exported_types`` may raise
    :class:`~modgate.core.errors.TypeEnumerationError` when only some of the
    exported types could be resolved.
    """

    name: str

    def exported_types(self) -> list[type]:
        """Return the classes exported by the module, in export order."""


__all__ = ["CandidateModule", "ModuleHandle"]
