"""Zip-backed archive I/O."""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Iterator
from pathlib import Path

from docparity.archive.models import Archive, ArchiveEntry
from docparity.errors import ArchiveError

logger = logging.getLogger(__name__)


def iter_zip_entries(path: str | Path) -> Iterator[tuple[str, bytes]]:
    """Yield ``(name, payload)`` for every file entry in physical order.

    Directory entries are skipped. Duplicate names are yielded as-is so
    callers can decide how to report collisions.
    """
    path = Path(path)
    try:
        with zipfile.ZipFile(path, "r") as zf:
            for info in zf.infolist():
                if info.is_dir():
                    continue
                yield info.filename, zf.read(info)
    except zipfile.BadZipFile as e:
        raise ArchiveError(f"Not a valid archive: {path}: {e}") from e


def read_archive(path: str | Path) -> Archive:
    """Read a zip file into an :class:`Archive`."""
    archive = Archive(ArchiveEntry(name, data) for name, data in iter_zip_entries(path))
    logger.debug("read %d entries from %s", len(archive), path)
    return archive


def write_archive(archive: Archive, path: str | Path) -> Path:
    """Write *archive* to a zip file, preserving entry order."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for entry in archive:
            zf.writestr(entry.name, entry.data)
    logger.debug("wrote %d entries to %s", len(archive), path)
    return path
