"""Archive comparison engine."""

from docparity.compare.comparator import ArchiveComparator, compare_archives
from docparity.compare.models import ComparisonResult
from docparity.config.models import ParityConfig
from docparity.hashing import ContentHasher, get_strategy


def create_comparator(config: ParityConfig) -> ArchiveComparator:
    """Build an ArchiveComparator from app-level config."""
    strategy = get_strategy(config.hashing.strategy, config.hashing.skip_entries)
    return ArchiveComparator(ContentHasher(strategy), dump_dir=config.compare.dump_dir)


__all__ = [
    "ArchiveComparator",
    "ComparisonResult",
    "compare_archives",
    "create_comparator",
]
