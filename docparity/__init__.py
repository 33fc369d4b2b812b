"""docparity — round-trip verification for packed document archives."""

from docparity.archive import Archive, ArchiveEntry, read_archive, write_archive
from docparity.compare import ArchiveComparator, ComparisonResult, compare_archives
from docparity.diff import DiffKind, DiffRecord, SemanticDiffer, flatten
from docparity.harness import RoundTripStressHarness, create_harness
from docparity.hashing import ArchiveChecksum, ContentHasher

__all__ = [
    "Archive",
    "ArchiveChecksum",
    "ArchiveComparator",
    "ArchiveEntry",
    "ComparisonResult",
    "ContentHasher",
    "DiffKind",
    "DiffRecord",
    "RoundTripStressHarness",
    "SemanticDiffer",
    "compare_archives",
    "create_harness",
    "flatten",
    "read_archive",
    "write_archive",
]
