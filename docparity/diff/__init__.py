"""Structured-text flattening and leaf-level diffing."""

from docparity.diff.differ import SemanticDiffer, diff
from docparity.diff.flattener import FlattenedPayload, flatten, is_structured
from docparity.diff.models import DiffKind, DiffRecord

__all__ = [
    "DiffKind",
    "DiffRecord",
    "FlattenedPayload",
    "SemanticDiffer",
    "diff",
    "flatten",
    "is_structured",
]
