"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import ParityConfig

CONFIG_ENV_VAR = "DOCPARITY_CONFIG"

# ${VAR} or ${VAR:-fallback}
_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def _candidate_paths(cli_path: str | None) -> list[Path]:
    paths = []
    if cli_path:
        if not Path(cli_path).is_file():
            raise ValueError(f"Config file not found: {cli_path}")
        paths.append(Path(cli_path))
    if os.environ.get(CONFIG_ENV_VAR):
        paths.append(Path(os.environ[CONFIG_ENV_VAR]))
    paths.append(Path("docparity.yaml"))
    paths.append(Path.home() / ".docparity" / "config.yaml")
    return paths


def load_config(cli_path: str | None = None) -> ParityConfig:
    """Load config with resolution order:
    CLI > $DOCPARITY_CONFIG > project-local > user-global > defaults.

    Empty files are skipped so a blank project file does not mask the
    user-global one.
    """
    for path in _candidate_paths(cli_path):
        if not path.is_file():
            continue
        try:
            raw = yaml.safe_load(path.read_text())
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        if raw is None:
            continue
        if not isinstance(raw, dict):
            raise ValueError(f"Invalid config in {path}: expected a mapping at the top level")
        try:
            return ParityConfig(**_expand_env_vars(raw))
        except ValidationError as e:
            raise ValueError(f"Invalid config in {path}: {e}") from e

    return ParityConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} and ${VAR:-fallback} references in strings."""
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), m.group(2) or ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `docparity config init`
DEFAULT_CONFIG_TEMPLATE = """\
# docparity.yaml

# Entry hashing
hashing:
  strategy: "normalized"       # raw | normalized
  skip_entries: []             # glob patterns, e.g. ["Header.json", "*/timestamps.json"]

# Archive comparison
compare:
  dump_dir: null               # e.g. ".docparity/diff" to keep mismatched entry pairs

# Round-trip stress harness
harness:
  src_dir: "Src"
  entropy_dir: "Entropy"
  entropy_entries: ["Entropy.json", "*/Entropy.json"]
  theme_entry: "References/Themes.json"
  checksum_entry: "Checksum.json"
  baseline_delta_kinds: ["ThemeChange"]

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
