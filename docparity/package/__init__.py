"""Reference document collaborators for generic zip packages."""

from docparity.compare import create_comparator
from docparity.config.models import ParityConfig
from docparity.package.delta import EntryDeltaEngine, EntryMerger
from docparity.package.model import PackageModel
from docparity.package.models import PackageDocument


def create_package_model(config: ParityConfig) -> PackageModel:
    """Build a PackageModel from app-level config."""
    return PackageModel(
        entropy_entries=config.harness.entropy_entries,
        checksum_entry=config.harness.checksum_entry,
        src_dir=config.harness.src_dir,
        entropy_dir=config.harness.entropy_dir,
        comparator=create_comparator(config),
    )


__all__ = [
    "EntryDeltaEngine",
    "EntryMerger",
    "PackageDocument",
    "PackageModel",
    "create_package_model",
]
