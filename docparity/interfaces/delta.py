"""Per-model delta and three-way merge interfaces."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

# Emitted by the delta engine even for a no-op comparison.
THEME_CHANGE = "ThemeChange"


class Delta(BaseModel):
    """One typed structural change between two documents."""

    model_config = ConfigDict(frozen=True)

    kind: str
    target: str = ""


@runtime_checkable
class DeltaEngine(Protocol):
    """Computes the structural changes that turn *doc_a* into *doc_b*."""

    def compute_delta(self, doc_a: Any, doc_b: Any) -> list[Delta]: ...


@runtime_checkable
class MergeEngine(Protocol):
    """Three-way merge of two descendants of a common *base*."""

    def merge(self, base: Any, ours: Any, theirs: Any) -> Any: ...
