"""Round-trip stress properties over the external document collaborators."""

from __future__ import annotations

import functools
import logging
import shutil
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TypeVar

from docparity.archive import read_archive
from docparity.compare import ArchiveComparator, ComparisonResult
from docparity.errors import EntropyError, ErrorContainer, FormatNotSupportedError
from docparity.interfaces import THEME_CHANGE, DeltaEngine, DocumentModel, MergeEngine
from docparity.tempfs import temp_dir, temp_file

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., bool])


def _guarded(func: F) -> F:
    """Turn any unexpected exception in a stress property into ``False``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> bool:
        try:
            return func(*args, **kwargs)
        except Exception:
            logger.exception("%s failed", func.__name__)
            return False

    return wrapper  # type: ignore[return-value]


def log_result(result: ComparisonResult, log: logging.Logger = logger) -> None:
    """Write one line per diagnostic of a non-identical result."""
    if result.identical:
        return
    for line in result.diagnostics:
        log.warning("  %s", line)


class RoundTripStressHarness:
    """Asserts round-trip and idempotence properties of a document model.

    Every public property returns a bool and never raises: faults are
    logged and reported as ``False``.
    """

    def __init__(
        self,
        model: DocumentModel,
        delta_engine: DeltaEngine,
        merge_engine: MergeEngine,
        comparator: ArchiveComparator | None = None,
        *,
        entropy_dir: str = "Entropy",
        baseline_delta_kinds: Iterable[str] = (THEME_CHANGE,),
    ) -> None:
        self.model = model
        self.delta_engine = delta_engine
        self.merge_engine = merge_engine
        self.comparator = comparator if comparator is not None else ArchiveComparator()
        self.entropy_dir = entropy_dir
        self.baseline_delta_kinds = frozenset(baseline_delta_kinds)

    # ------------------------------------------------------------------
    # Save/compare round-trip
    # ------------------------------------------------------------------

    def compare_files(self, path_a: Path, path_b: Path) -> bool:
        """Compare two archives on disk and log any diagnostics."""
        result = self.comparator.compare(read_archive(path_a), read_archive(path_b))
        log_result(result)
        return result.identical

    def compare_documents(self, doc1: Any, doc2: Any) -> bool:
        """Save both documents independently and compare the archives."""
        with temp_file() as temp1, temp_file() as temp2:
            self.model.save_to_archive(doc1, temp1).raise_on_errors()
            self.model.save_to_archive(doc2, temp2).raise_on_errors()
            return self.compare_files(temp1, temp2)

    # ------------------------------------------------------------------
    # Idempotence
    # ------------------------------------------------------------------

    def has_no_deltas(self, doc1: Any, doc2: Any, strict: bool = False) -> bool:
        """No structural delta between the documents, and equal archives.

        With *strict*, entropy artifacts take part in the archive comparison;
        otherwise both sides are stripped of entropy first.
        """
        deltas = [
            d
            for d in self.delta_engine.compute_delta(doc1, doc2)
            if d.kind not in self.baseline_delta_kinds
        ]
        if deltas:
            for delta in deltas:
                logger.warning("  unexpected delta: %s %s", delta.kind, delta.target)
            return False

        with temp_file() as temp1, temp_file() as temp2:
            self.model.save_to_archive(doc1, temp1).raise_on_errors()
            self.model.save_to_archive(doc2, temp2).raise_on_errors()

            if strict:
                return self.compare_files(temp1, temp2)

            stripped1 = self.remove_entropy(temp1)
            stripped2 = self.remove_entropy(temp2)
            return self.compare_documents(stripped1, stripped2)

    def remove_entropy(self, archive_path: Path) -> Any:
        """Unpack, delete the entropy subtree, and reload from the tree."""
        with temp_dir() as tree:
            doc, errors = self.model.load_from_archive(archive_path)
            errors.raise_on_errors()
            self.model.save_to_tree(doc, tree).raise_on_errors()

            entropy = tree / self.entropy_dir
            if not entropy.is_dir():
                raise EntropyError(f"Missing entropy dir: {entropy}")
            shutil.rmtree(entropy)

            stripped, errors = self.model.load_from_tree(tree)
            errors.raise_on_errors()
            return stripped

    @_guarded
    def test_clone(self, path: Path) -> bool:
        """A clone is indistinguishable from its source, entropy included."""
        doc, errors = self.model.load_from_archive(path)
        errors.raise_on_errors()
        clone = self.model.clone(doc)
        return self.has_no_deltas(doc, clone, strict=True)

    @_guarded
    def diff_stress_test(self, path: Path) -> bool:
        """A document compared with itself has no deltas."""
        doc, errors = self.model.load_from_archive(path)
        errors.raise_on_errors()
        return self.has_no_deltas(doc, doc)

    @_guarded
    def merge_stress_test(self, path1: Path, path2: Path) -> bool:
        """Merging against an unchanged side is a no-op, both ways round.

        ``theirs`` equals the common ancestor, so the merge must return
        ``ours`` untouched.
        """
        doc1, errors = self.model.load_from_archive(path1)
        errors.raise_on_errors()
        doc2, errors = self.model.load_from_archive(path2)
        errors.raise_on_errors()

        merged1 = self.merge_engine.merge(base=doc2, ours=doc1, theirs=doc2)
        ok1 = self.has_no_deltas(doc1, merged1)

        merged2 = self.merge_engine.merge(base=doc1, ours=doc2, theirs=doc1)
        ok2 = self.has_no_deltas(doc2, merged2)

        return ok1 and ok2

    # ------------------------------------------------------------------
    # Full pipeline
    # ------------------------------------------------------------------

    @_guarded
    def stress_test(self, path: Path) -> bool:
        """archive -> model -> archive -> tree, then clone and self-diff."""
        path = Path(path)
        with temp_file() as out_file:
            try:
                doc, errors = self.model.load_from_archive(path)
            except FormatNotSupportedError as e:
                errors = ErrorContainer()
                errors.format_not_supported(f"Too old: {path} ({e})")
                errors.write(logger)
                return False
            errors.write(logger)
            # Warnings (checksum mismatch, name collisions) are tolerated.
            errors.raise_on_errors()

            self.model.save_to_archive(doc, out_file).raise_on_errors()
            if not self.compare_files(path, out_file):
                return False

            with temp_dir() as src:
                self.model.save_to_tree(doc, src, verify_original=path).raise_on_errors()

        if not self.test_clone(path):
            return False
        if not self.diff_stress_test(path):
            return False
        return True
