from typing import Literal

from pydantic import BaseModel, Field


class HashingConfig(BaseModel):
    strategy: Literal["raw", "normalized"] = "normalized"
    skip_entries: list[str] = []


class CompareConfig(BaseModel):
    dump_dir: str | None = None


class HarnessConfig(BaseModel):
    src_dir: str = "Src"
    entropy_dir: str = "Entropy"
    entropy_entries: list[str] = ["Entropy.json", "*/Entropy.json"]
    theme_entry: str = "References/Themes.json"
    checksum_entry: str = "Checksum.json"
    baseline_delta_kinds: list[str] = ["ThemeChange"]


class ParityConfig(BaseModel):
    hashing: HashingConfig = Field(default_factory=HashingConfig)
    compare: CompareConfig = Field(default_factory=CompareConfig)
    harness: HarnessConfig = Field(default_factory=HarnessConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
