"""Core admission engine components."""

from __future__ import annotations

# NOTE: keep imports explicit for export clarity.
from .criterion import AdmitResult, Criterion, check_complaint_quality
from .criteria import exclude_names, exports_any_class, has_attributes, subclass_of
from .errors import (
    ComplaintQualityError,
    InvalidCriterionArgument,
    ModuleExitError,
    TypeEnumerationError,
)
from .interception import Classified, Unclassified, intercept_partial_load

__all__ = [
    "AdmitResult",
    "Classified",
    "ComplaintQualityError",
    "Criterion",
    "InvalidCriterionArgument",
    "ModuleExitError",
    "TypeEnumerationError",
    "Unclassified",
    "check_complaint_quality",
    "exclude_names",
    "exports_any_class",
    "has_attributes",
    "intercept_partial_load",
    "subclass_of",
]
