"""Result model for archive comparisons."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from docparity.diff.models import DiffRecord
from docparity.errors import MismatchFault, StructuralMismatchError


class ComparisonResult(BaseModel):
    """Outcome of comparing two archives.

    ``identical`` is true only when the whole-archive hashes match. A
    different result may still carry no records: ``unresolved_entries`` lists
    entries whose hashes differ but whose flattened payloads are equal
    (member reordering, a dropped empty object).
    """

    model_config = ConfigDict(frozen=True)

    identical: bool
    first_hash: str = ""
    second_hash: str = ""
    records: tuple[DiffRecord, ...] = ()
    added_entries: tuple[str, ...] = ()
    removed_entries: tuple[str, ...] = ()
    unresolved_entries: tuple[str, ...] = ()
    fault: MismatchFault | None = None

    @property
    def is_fatal(self) -> bool:
        return self.fault is not None

    @property
    def diagnostics(self) -> list[str]:
        """Human-readable lines, one per record or membership difference."""
        lines = [f"ADDED ENTRY {name}" for name in self.added_entries]
        lines.extend(f"REMOVED ENTRY {name}" for name in self.removed_entries)
        lines.extend(f"UNRESOLVED ENTRY {name}" for name in self.unresolved_entries)
        lines.extend(str(r) for r in self.records)
        if self.fault is not None:
            lines.append(f"FATAL {self.fault.message}")
        return lines

    def raise_on_fault(self) -> None:
        if self.fault is not None:
            raise StructuralMismatchError(self.fault.entry, self.fault.message)
