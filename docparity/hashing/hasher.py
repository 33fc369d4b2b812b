"""Per-entry content hashing with pluggable normalization strategies."""

from __future__ import annotations

import fnmatch
import hashlib
import json
import re
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

# Whitespace between JSON tokens. String literals are matched first so the
# whitespace inside them survives.
_JSON_TOKEN_WS = re.compile(r'("(?:[^"\\]|\\.)*")|[ \t\n\r]+')


def compute_hash(content: bytes) -> str:
    """SHA-256 hex digest of *content*."""
    return hashlib.sha256(content).hexdigest()


@dataclass(frozen=True)
class EntryHash:
    """Hash of one archive entry under a given strategy."""

    name: str
    value: str


@runtime_checkable
class HashStrategy(Protocol):
    """Turns an entry's bytes into the bytes that get hashed.

    Returning ``None`` means the entry is not comparable under this strategy
    and must be skipped by callers.
    """

    name: str

    def normalize(self, entry_name: str, data: bytes) -> bytes | None: ...


class _SkippingStrategy:
    name = "base"

    def __init__(self, skip: list[str] | tuple[str, ...] = ()) -> None:
        self.skip = tuple(skip)

    def skips(self, entry_name: str) -> bool:
        return any(fnmatch.fnmatchcase(entry_name, pattern) for pattern in self.skip)


class RawStrategy(_SkippingStrategy):
    """Hash bytes verbatim."""

    name = "raw"

    def normalize(self, entry_name: str, data: bytes) -> bytes | None:
        if self.skips(entry_name):
            return None
        return data


class NormalizedStrategy(_SkippingStrategy):
    """Canonicalize volatile text formatting before hashing.

    JSON payloads lose the whitespace between tokens (member order and token
    text are kept). Other UTF-8 text gets LF line endings and no trailing
    whitespace. Anything else is hashed verbatim.
    """

    name = "normalized"

    def normalize(self, entry_name: str, data: bytes) -> bytes | None:
        if self.skips(entry_name):
            return None
        encoding = json.detect_encoding(data)
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError:
            return data
        try:
            json.loads(text)
        except (ValueError, RecursionError):
            # Too deeply nested counts as non-JSON.
            if not encoding.startswith("utf-8"):
                return data
            lines = text.replace("\r\n", "\n").replace("\r", "\n").split("\n")
            return "\n".join(line.rstrip() for line in lines).encode("utf-8")
        return _minify_json(text).encode("utf-8")


def _minify_json(text: str) -> str:
    return _JSON_TOKEN_WS.sub(lambda m: m.group(1) or "", text)


_STRATEGIES: dict[str, type[_SkippingStrategy]] = {
    RawStrategy.name: RawStrategy,
    NormalizedStrategy.name: NormalizedStrategy,
}


def get_strategy(name: str, skip: list[str] | tuple[str, ...] = ()) -> HashStrategy:
    """Resolve a strategy by name (``raw`` or ``normalized``)."""
    cls = _STRATEGIES.get(name)
    if cls is None:
        raise ValueError(
            f"Unsupported hash strategy: {name!r}. "
            f"Supported: {', '.join(_STRATEGIES)}"
        )
    return cls(skip)


class ContentHasher:
    """Deterministic per-entry hashing under one strategy."""

    def __init__(self, strategy: HashStrategy | None = None) -> None:
        self.strategy = strategy if strategy is not None else NormalizedStrategy()

    def hash(self, entry_name: str, data: bytes) -> str | None:
        """Return the entry hash, or ``None`` when the strategy skips it."""
        normalized = self.strategy.normalize(entry_name, data)
        if normalized is None:
            return None
        return compute_hash(normalized)

    def entry_hash(self, entry_name: str, data: bytes) -> EntryHash | None:
        value = self.hash(entry_name, data)
        return EntryHash(entry_name, value) if value is not None else None
