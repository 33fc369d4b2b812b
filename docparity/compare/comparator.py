"""Archive comparison: whole-hash short-circuit, then per-entry reconciliation."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from docparity.archive import Archive, read_archive
from docparity.compare.models import ComparisonResult
from docparity.diff import DiffRecord, SemanticDiffer, flatten
from docparity.errors import MismatchFault, StructuralMismatchError
from docparity.hashing import ArchiveChecksum, ContentHasher, get_strategy

logger = logging.getLogger(__name__)


class ArchiveComparator:
    """Compares two archives and explains any difference.

    Every call to :meth:`compare` works on its own local maps; the
    comparator holds no state between calls beyond its configuration.
    """

    def __init__(
        self,
        hasher: ContentHasher | None = None,
        dump_dir: str | Path | None = None,
    ) -> None:
        self.hasher = hasher if hasher is not None else ContentHasher()
        self.checksum = ArchiveChecksum(self.hasher)
        self.dump_dir = Path(dump_dir) if dump_dir else None

    def compare(self, first: Archive, second: Archive) -> ComparisonResult:
        first_hash = self.checksum.whole(first)
        second_hash = self.checksum.whole(second)
        if first_hash == second_hash:
            return ComparisonResult(
                identical=True, first_hash=first_hash, second_hash=second_hash
            )

        # Pass 1: reference archive. name -> (hash, payload)
        seen: dict[str, tuple[str, bytes]] = {}
        for entry in first.sorted_entries():
            value = self.hasher.hash(entry.name, entry.data)
            if value is None:
                continue
            seen[entry.name] = (value, entry.data)

        # Pass 2: candidate archive consumes matches from `seen`.
        records: list[DiffRecord] = []
        added: list[str] = []
        unresolved: list[str] = []
        fault: MismatchFault | None = None
        try:
            for entry in second.sorted_entries():
                value = self.hasher.hash(entry.name, entry.data)
                if value is None:
                    continue

                if entry.name not in seen:
                    logger.warning("second archive has added entry: %s", entry.name)
                    added.append(entry.name)
                    continue

                original_hash, original = seen.pop(entry.name)
                if original_hash == value:
                    continue

                self._dump_mismatch(entry.name, original, entry.data)
                entry_records = self._diff_entry(entry.name, original, entry.data)
                if entry_records:
                    records.extend(entry_records)
                else:
                    logger.warning("hash mismatch with no leaf difference: %s", entry.name)
                    unresolved.append(entry.name)
        except StructuralMismatchError as e:
            logger.error("%s", e)
            fault = MismatchFault(entry=e.entry, message=str(e))

        # Whatever pass 2 did not consume exists only in the reference archive.
        removed: list[str] = [] if fault is not None else list(seen)
        for name in removed:
            logger.warning("second archive is missing entry: %s", name)

        # Whole hashes differ: never identical, even when no entry explains it.
        return ComparisonResult(
            identical=False,
            first_hash=first_hash,
            second_hash=second_hash,
            records=tuple(records),
            added_entries=tuple(added),
            removed_entries=tuple(removed),
            unresolved_entries=tuple(unresolved),
            fault=fault,
        )

    def compare_paths(self, first: str | Path, second: str | Path) -> ComparisonResult:
        return self.compare(read_archive(first), read_archive(second))

    @staticmethod
    def _diff_entry(name: str, original: bytes, candidate: bytes) -> list[DiffRecord]:
        try:
            flat_original = flatten(original)
            flat_candidate = flatten(candidate)
        except (ValueError, RecursionError) as e:
            raise StructuralMismatchError(name) from e
        return SemanticDiffer.diff(flat_original, flat_candidate, entry=name)

    def _dump_mismatch(self, name: str, original: bytes, candidate: bytes) -> None:
        """Write both sides of a mismatched entry for offline inspection.

        The entry's folders are kept under ``dump_dir``: ``Controls/Screen1.json``
        becomes ``Controls/Screen1-A.json`` and ``Controls/Screen1-B.json``.
        """
        if self.dump_dir is None:
            return
        entry = PurePosixPath(name)
        target = self.dump_dir.joinpath(*entry.parent.parts)
        if not target.resolve().is_relative_to(self.dump_dir.resolve()):
            logger.warning("not dumping %s: name escapes the dump directory", name)
            return
        target.mkdir(parents=True, exist_ok=True)
        (target / f"{entry.stem}-A{entry.suffix}").write_bytes(original)
        (target / f"{entry.stem}-B{entry.suffix}").write_bytes(candidate)
        logger.debug("dumped mismatched entry %s to %s", name, target)


def compare_archives(
    first: str | Path,
    second: str | Path,
    *,
    strategy: str = "normalized",
    skip: list[str] | tuple[str, ...] = (),
    dump_dir: str | Path | None = None,
) -> ComparisonResult:
    """Compare two archives on disk. Standalone entry point for test tooling."""
    comparator = ArchiveComparator(
        ContentHasher(get_strategy(strategy, skip)), dump_dir=dump_dir
    )
    return comparator.compare_paths(first, second)
