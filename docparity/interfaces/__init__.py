"""Capability interfaces for the external document collaborators."""

from docparity.interfaces.delta import THEME_CHANGE, Delta, DeltaEngine, MergeEngine
from docparity.interfaces.document import DocumentModel

__all__ = [
    "THEME_CHANGE",
    "Delta",
    "DeltaEngine",
    "DocumentModel",
    "MergeEngine",
]
