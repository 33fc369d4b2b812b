"""In-memory form of a generic package document."""

from __future__ import annotations

from dataclasses import dataclass, field

from docparity.archive import Archive


@dataclass
class PackageDocument:
    """A package held as named payloads.

    ``entries`` carry the document content. ``entropy`` carries regenerable,
    non-deterministic artifacts that are kept for byte-faithful re-packing
    but excluded from lenient comparisons.
    """

    entries: dict[str, bytes] = field(default_factory=dict)
    entropy: dict[str, bytes] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.entries or name in self.entropy

    def get(self, name: str) -> bytes | None:
        if name in self.entries:
            return self.entries[name]
        return self.entropy.get(name)

    def copy(self) -> PackageDocument:
        return PackageDocument(entries=dict(self.entries), entropy=dict(self.entropy))

    def to_archive(self) -> Archive:
        return Archive.from_mapping({**self.entries, **self.entropy})
