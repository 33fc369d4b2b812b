from .loader import load_config
from .models import (
    CompareConfig,
    HarnessConfig,
    HashingConfig,
    ParityConfig,
)

__all__ = [
    "CompareConfig",
    "HarnessConfig",
    "HashingConfig",
    "ParityConfig",
    "load_config",
]
