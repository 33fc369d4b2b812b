"""Classify differences between two flattened payloads."""

from __future__ import annotations

from collections.abc import Mapping

from docparity.diff.models import DiffKind, DiffRecord


class SemanticDiffer:
    """Emits changed / removed / added records for two flattened payloads.

    Leaf values are compared as raw text, byte for byte: ``1`` and ``1.0``
    are reported as changed. Records follow the iteration order of the
    inputs, so ordered mappings give reproducible output.
    """

    @staticmethod
    def diff(
        first: Mapping[str, str],
        second: Mapping[str, str],
        entry: str = "",
    ) -> list[DiffRecord]:
        records: list[DiffRecord] = []

        for path, raw in first.items():
            if path in second:
                if raw != second[path]:
                    records.append(DiffRecord(kind=DiffKind.changed, path=path, entry=entry))
            else:
                records.append(DiffRecord(kind=DiffKind.removed, path=path, entry=entry))

        for path in second:
            if path not in first:
                records.append(DiffRecord(kind=DiffKind.added, path=path, entry=entry))

        return records


def diff(
    first: Mapping[str, str],
    second: Mapping[str, str],
    entry: str = "",
) -> list[DiffRecord]:
    """Convenience wrapper around SemanticDiffer.diff()."""
    return SemanticDiffer.diff(first, second, entry)
