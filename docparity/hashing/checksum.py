"""Whole-archive and per-entry checksums."""

from __future__ import annotations

from docparity.archive.models import Archive
from docparity.hashing.hasher import ContentHasher, compute_hash


class ArchiveChecksum:
    """Order-independent archive checksums built on a :class:`ContentHasher`."""

    def __init__(self, hasher: ContentHasher | None = None) -> None:
        self.hasher = hasher if hasher is not None else ContentHasher()

    def per_entry(self, archive: Archive) -> dict[str, str]:
        """Name-sorted map of entry name -> hash. Skipped entries are omitted."""
        hashes: dict[str, str] = {}
        for entry in archive.sorted_entries():
            entry_hash = self.hasher.entry_hash(entry.name, entry.data)
            if entry_hash is not None:
                hashes[entry_hash.name] = entry_hash.value
        return hashes

    def whole(self, archive: Archive) -> str:
        """Single hash over every comparable entry, sorted by name.

        A match between two archives is conclusive; a mismatch only means
        per-entry inspection is needed.
        """
        lines = (f"{name}\0{value}\n" for name, value in self.per_entry(archive).items())
        return compute_hash("".join(lines).encode("utf-8"))
