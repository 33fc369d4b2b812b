"""Packed archive model and zip I/O."""

from docparity.archive.models import Archive, ArchiveEntry
from docparity.archive.reader import iter_zip_entries, read_archive, write_archive

__all__ = [
    "Archive",
    "ArchiveEntry",
    "iter_zip_entries",
    "read_archive",
    "write_archive",
]
