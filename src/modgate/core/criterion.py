"""Admission criteria evaluated against candidate modules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Sequence

from .errors import ComplaintQualityError, InvalidCriterionArgument, TypeEnumerationError
from .interception import Classified, intercept_partial_load

Verdict = tuple[bool, Sequence[str] | None]
ModulePredicate = Callable[[Any], Verdict]
TypePredicate = Callable[[type], Verdict]


@dataclass(frozen=True, slots=True)
class AdmitResult:
    """Outcome of evaluating one criterion against one module."""

    admit: bool
    complaints: tuple[str, ...] = ()

    def __iter__(self) -> Iterator[Any]:
        yield self.admit
        yield self.complaints


def check_complaint_quality(complaints: str | Iterable[str] | None) -> tuple[str, ...]:
    """Validate a default complaint set and return it as a tuple."""
    if complaints is None:
        raise ComplaintQualityError("Default complaints must be provided.")
    if isinstance(complaints, str):
        complaints = (complaints,)
    checked = tuple(complaints)
    if not checked:
        raise ComplaintQualityError("Default complaints must not be empty.")
    for idx, complaint in enumerate(checked):
        if not isinstance(complaint, str) or not complaint.strip():
            raise ComplaintQualityError(
                f"Default complaint #{idx} must be a non-blank string, got {complaint!r}."
            )
    return checked


@dataclass(frozen=True, slots=True)
class Criterion:
    """A stateless admission rule.

    Build instances with :meth:`from_module_predicate` or
    :meth:`from_type_predicate`; both validate their arguments immediately.
    """

    predicate: ModulePredicate
    name: str = "criterion"

    @classmethod
    def from_module_predicate(
        cls,
        predicate: ModulePredicate | None,
        *,
        name: str | None = None,
    ) -> "Criterion":
        """Wrap a predicate that inspects the whole module.

        When the predicate rejects, it should explain why through its
        complaints.
        """
        if predicate is None or not callable(predicate):
            raise InvalidCriterionArgument("predicate")
        return cls(predicate=predicate, name=name or _describe(predicate))

    @classmethod
    def from_type_predicate(
        cls,
        type_predicate: TypePredicate | None,
        default_complaints: str | Iterable[str],
        *,
        name: str | None = None,
    ) -> "Criterion":
        """Admit a module when at least one of its exported types satisfies
        ``type_predicate``.

        ``default_complaints`` are reported when no type predicate call
        supplied a complaint of its own.
        """
        if type_predicate is None or not callable(type_predicate):
            raise InvalidCriterionArgument("type_predicate")
        defaults = check_complaint_quality(default_complaints)
        return cls.from_module_predicate(
            _TypeLifter(type_predicate, defaults),
            name=name or _describe(type_predicate),
        )

    def evaluate(self, module: Any) -> AdmitResult:
        admit, complaints = self.predicate(module)
        if admit:
            return AdmitResult(admit=True)
        return AdmitResult(admit=False, complaints=_as_complaints(complaints))


@dataclass(frozen=True, slots=True)
class _TypeLifter:
    """Module predicate built from a per-type predicate."""

    type_predicate: TypePredicate
    default_complaints: tuple[str, ...]

    def __call__(self, module: Any) -> Verdict:
        try:
            types = list(module.exported_types())
        except TypeEnumerationError as exc:
            outcome = intercept_partial_load(exc)
            if isinstance(outcome, Classified):
                return False, outcome.complaints
            raise exc.flatten() from exc

        complaints: list[str] = []
        for candidate_type in types:
            matched, type_complaints = self.type_predicate(candidate_type)
            if matched:
                return True, None
            complaints.extend(_as_complaints(type_complaints))

        if not complaints:
            complaints.extend(self.default_complaints)
        return False, complaints


def _as_complaints(complaints: str | Iterable[str] | None) -> tuple[str, ...]:
    if not complaints:
        return ()
    if isinstance(complaints, str):
        return (complaints,)
    return tuple(complaints)


def _describe(predicate: Any) -> str:
    return getattr(predicate, "__name__", None) or type(predicate).__name__


__all__ = [
    "AdmitResult",
    "Criterion",
    "ModulePredicate",
    "TypePredicate",
    "Verdict",
    "check_complaint_quality",
]
