"""PackageModel: zip archive <-> PackageDocument <-> editable source tree."""

from __future__ import annotations

import fnmatch
import json
import logging
import zipfile
from pathlib import Path

from docparity.archive import iter_zip_entries, write_archive
from docparity.compare import ArchiveComparator
from docparity.errors import (
    CHECKSUM_MISMATCH,
    NAME_COLLISION,
    ArchiveError,
    ErrorContainer,
    FormatNotSupportedError,
    LoadError,
)
from docparity.hashing import compute_hash
from docparity.package.models import PackageDocument
from docparity.tempfs import temp_file

logger = logging.getLogger(__name__)

ROUNDTRIP_MISMATCH = "roundtrip-mismatch"
UNSAFE_NAME = "unsafe-name"


class PackageModel:
    """Reference document model for zip-packed packages.

    The source tree keeps content entries under ``src_dir`` and entropy
    artifacts under ``entropy_dir``. The entropy directory is always
    created, even when empty, so it can be stripped unconditionally.
    """

    def __init__(
        self,
        *,
        entropy_entries: list[str] | tuple[str, ...] = ("Entropy.json",),
        checksum_entry: str | None = "Checksum.json",
        src_dir: str = "Src",
        entropy_dir: str = "Entropy",
        comparator: ArchiveComparator | None = None,
    ) -> None:
        self.entropy_entries = tuple(entropy_entries)
        self.checksum_entry = checksum_entry
        self.src_dir = src_dir
        self.entropy_dir = entropy_dir
        self.comparator = comparator if comparator is not None else ArchiveComparator()

    def is_entropy(self, name: str) -> bool:
        return any(fnmatch.fnmatchcase(name, pattern) for pattern in self.entropy_entries)

    # ------------------------------------------------------------------
    # Archive
    # ------------------------------------------------------------------

    def load_from_archive(self, path: Path) -> tuple[PackageDocument, ErrorContainer]:
        path = Path(path)
        if not path.is_file():
            raise LoadError(f"Package not found: {path}")
        if not zipfile.is_zipfile(path):
            raise FormatNotSupportedError(f"Not a supported package format: {path}")

        errors = ErrorContainer()
        doc = PackageDocument()
        try:
            for name, data in iter_zip_entries(path):
                if name in doc:
                    errors.warn(NAME_COLLISION, f"Duplicate entry {name!r}, keeping the first")
                    continue
                target = doc.entropy if self.is_entropy(name) else doc.entries
                target[name] = data
        except ArchiveError as e:
            raise LoadError(str(e)) from e

        self._verify_checksums(doc, errors)
        logger.debug(
            "loaded %s: %d entries, %d entropy", path, len(doc.entries), len(doc.entropy)
        )
        return doc, errors

    def save_to_archive(self, doc: PackageDocument, path: Path) -> ErrorContainer:
        write_archive(doc.to_archive(), path)
        return ErrorContainer()

    def _verify_checksums(self, doc: PackageDocument, errors: ErrorContainer) -> None:
        """Check entry hashes against the package's own checksum manifest, if any."""
        if not self.checksum_entry:
            return
        raw = doc.get(self.checksum_entry)
        if raw is None:
            return
        try:
            files = json.loads(raw).get("files", {})
        except (ValueError, AttributeError):
            errors.warn(CHECKSUM_MISMATCH, f"Unreadable checksum manifest {self.checksum_entry}")
            return
        if not isinstance(files, dict):
            errors.warn(CHECKSUM_MISMATCH, f"Unreadable checksum manifest {self.checksum_entry}")
            return

        for name, expected in files.items():
            data = doc.get(name)
            if data is None:
                errors.warn(CHECKSUM_MISMATCH, f"{name} is listed in the checksum manifest but missing")
            elif compute_hash(data) != expected:
                errors.warn(CHECKSUM_MISMATCH, f"Checksum mismatch for {name}")

    # ------------------------------------------------------------------
    # Source tree
    # ------------------------------------------------------------------

    def save_to_tree(
        self,
        doc: PackageDocument,
        path: Path,
        verify_original: Path | None = None,
    ) -> ErrorContainer:
        """Unpack *doc* into an editable tree at *path*.

        With *verify_original*, the written tree is re-packed and compared
        against that archive; any difference is reported as an error.
        """
        root = Path(path)
        errors = ErrorContainer()
        self._write_files(root / self.src_dir, doc.entries, errors)
        (root / self.entropy_dir).mkdir(parents=True, exist_ok=True)
        self._write_files(root / self.entropy_dir, doc.entropy, errors)

        if verify_original is not None and not errors.has_errors:
            errors.extend(self._verify_round_trip(root, Path(verify_original)))
        return errors

    def load_from_tree(self, path: Path) -> tuple[PackageDocument, ErrorContainer]:
        root = Path(path)
        src = root / self.src_dir
        if not src.is_dir():
            raise LoadError(f"Missing source directory: {src}")

        doc = PackageDocument(entries=_read_files(src), entropy=_read_files(root / self.entropy_dir))
        return doc, ErrorContainer()

    def _write_files(self, base: Path, payloads: dict[str, bytes], errors: ErrorContainer) -> None:
        base.mkdir(parents=True, exist_ok=True)
        resolved_base = base.resolve()
        for name, data in payloads.items():
            dest = base / name
            # Guard against entry names escaping the tree
            if not dest.resolve().is_relative_to(resolved_base):
                errors.error(UNSAFE_NAME, f"Entry name escapes the source tree: {name}")
                continue
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_bytes(data)

    def _verify_round_trip(self, root: Path, original: Path) -> ErrorContainer:
        errors = ErrorContainer()
        reloaded, load_errors = self.load_from_tree(root)
        errors.extend(load_errors)
        with temp_file(suffix=".zip") as repacked:
            self.save_to_archive(reloaded, repacked)
            try:
                result = self.comparator.compare_paths(original, repacked)
            except ArchiveError as e:
                errors.error(ROUNDTRIP_MISMATCH, str(e))
                return errors
        if not result.identical:
            detail = "; ".join(result.diagnostics)
            errors.error(ROUNDTRIP_MISMATCH, f"Source tree does not re-pack to {original}: {detail}")
        return errors

    # ------------------------------------------------------------------
    # Memory
    # ------------------------------------------------------------------

    def clone(self, doc: PackageDocument) -> PackageDocument:
        return doc.copy()


def _read_files(base: Path) -> dict[str, bytes]:
    if not base.is_dir():
        return {}
    return {
        p.relative_to(base).as_posix(): p.read_bytes()
        for p in sorted(base.rglob("*"))
        if p.is_file()
    }
