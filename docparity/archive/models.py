"""Data models for packed archives."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass

from docparity.errors import ArchiveError


@dataclass(frozen=True)
class ArchiveEntry:
    """One named payload inside an archive."""

    name: str
    data: bytes


class Archive:
    """An ordered collection of uniquely named byte payloads.

    Entry order is the physical storage order. Anything that has to be
    reproducible (hashes, diagnostics) goes through :meth:`sorted_entries`.
    """

    def __init__(self, entries: Iterable[ArchiveEntry] = ()) -> None:
        self.entries: tuple[ArchiveEntry, ...] = tuple(entries)
        self._by_name: dict[str, ArchiveEntry] = {}
        for entry in self.entries:
            if entry.name in self._by_name:
                raise ArchiveError(f"Duplicate entry name in archive: {entry.name}")
            self._by_name[entry.name] = entry

    @classmethod
    def from_mapping(cls, payloads: Mapping[str, bytes]) -> Archive:
        return cls(ArchiveEntry(name, data) for name, data in payloads.items())

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[ArchiveEntry]:
        return iter(self.entries)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def names(self) -> list[str]:
        return [e.name for e in self.entries]

    def get(self, name: str) -> bytes | None:
        entry = self._by_name.get(name)
        return entry.data if entry is not None else None

    def sorted_entries(self) -> list[ArchiveEntry]:
        """Entries ordered by name, independent of storage order."""
        return sorted(self.entries, key=lambda e: e.name)
