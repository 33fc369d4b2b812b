"""Round-trip stress harness."""

from docparity.compare import create_comparator
from docparity.config.models import ParityConfig
from docparity.harness.stress import RoundTripStressHarness, log_result
from docparity.package import EntryDeltaEngine, EntryMerger, create_package_model


def create_harness(config: ParityConfig) -> RoundTripStressHarness:
    """Wire the reference package collaborators into a harness."""
    return RoundTripStressHarness(
        create_package_model(config),
        EntryDeltaEngine(theme_entry=config.harness.theme_entry),
        EntryMerger(),
        create_comparator(config),
        entropy_dir=config.harness.entropy_dir,
        baseline_delta_kinds=config.harness.baseline_delta_kinds,
    )


__all__ = [
    "RoundTripStressHarness",
    "create_harness",
    "log_result",
]
