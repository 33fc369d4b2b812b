"""Diff record models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class DiffKind(str, Enum):
    changed = "changed"
    removed = "removed"
    added = "added"


class DiffRecord(BaseModel):
    """A single leaf-level difference between two structured payloads."""

    model_config = ConfigDict(frozen=True)

    kind: DiffKind
    path: str
    entry: str = ""

    def __str__(self) -> str:
        where = f"{self.entry}: {self.path}" if self.entry else self.path
        return f"{self.kind.value.upper()} {where}"
