"""Content hashing for archive entries."""

from docparity.hashing.checksum import ArchiveChecksum
from docparity.hashing.hasher import (
    ContentHasher,
    EntryHash,
    HashStrategy,
    NormalizedStrategy,
    RawStrategy,
    compute_hash,
    get_strategy,
)

__all__ = [
    "ArchiveChecksum",
    "ContentHasher",
    "EntryHash",
    "HashStrategy",
    "NormalizedStrategy",
    "RawStrategy",
    "compute_hash",
    "get_strategy",
]
