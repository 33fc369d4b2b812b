"""Flatten a JSON payload into leaf path -> raw leaf text.

Leaf values are exact slices of the source text, never re-serialized, so
``1`` and ``1.0`` (or ``[1,2]`` and ``[1, 2]``) remain distinguishable.

Path rules:

* object members become ``parent.key`` (root members use ``key``)
* a non-empty array whose *first* element is an object is walked per
  element as ``parent[i].key``; non-object elements in such an array add
  nothing
* empty arrays, arrays of scalars and arrays of arrays are one opaque leaf
  at the array's own path
* empty objects add nothing
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from json.decoder import scanstring
from json.scanner import NUMBER_RE

_WS = re.compile(r"[ \t\n\r]*")

# Literal tokens json.loads accepts. -Infinity must be tried before numbers.
_LITERALS = ("null", "true", "false", "NaN", "Infinity", "-Infinity")

FlattenedPayload = dict[str, str]


@dataclass
class _Span:
    kind: str  # "object" | "array" | "scalar"
    start: int
    end: int = 0
    members: list[tuple[str, _Span]] = field(default_factory=list)
    items: list[_Span] = field(default_factory=list)


def _skip_ws(text: str, idx: int) -> int:
    return _WS.match(text, idx).end()


def _scan(text: str, idx: int) -> _Span:
    """Scan the value at *idx* (no leading whitespace). Input is valid JSON."""
    ch = text[idx]

    if ch == "{":
        node = _Span("object", idx)
        idx = _skip_ws(text, idx + 1)
        if text[idx] == "}":
            node.end = idx + 1
            return node
        while True:
            key, idx = scanstring(text, idx + 1)
            idx = _skip_ws(text, idx)
            idx = _skip_ws(text, idx + 1)  # past ':'
            child = _scan(text, idx)
            node.members.append((key, child))
            idx = _skip_ws(text, child.end)
            if text[idx] == "}":
                node.end = idx + 1
                return node
            idx = _skip_ws(text, idx + 1)  # past ','

    if ch == "[":
        node = _Span("array", idx)
        idx = _skip_ws(text, idx + 1)
        if text[idx] == "]":
            node.end = idx + 1
            return node
        while True:
            child = _scan(text, idx)
            node.items.append(child)
            idx = _skip_ws(text, child.end)
            if text[idx] == "]":
                node.end = idx + 1
                return node
            idx = _skip_ws(text, idx + 1)

    if ch == '"':
        _, end = scanstring(text, idx + 1)
        return _Span("scalar", idx, end)

    for literal in _LITERALS:
        if text.startswith(literal, idx):
            return _Span("scalar", idx, idx + len(literal))

    match = NUMBER_RE.match(text, idx)
    if match is None:
        raise json.JSONDecodeError("Expecting value", text, idx)
    return _Span("scalar", idx, match.end())


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _leaves(path: str, node: _Span, text: str, out: FlattenedPayload) -> None:
    if node.kind == "object":
        for key, child in node.members:
            _leaves(_join(path, key), child, text, out)
        return

    if node.kind == "array" and node.items and node.items[0].kind == "object":
        for index, item in enumerate(node.items):
            if item.kind == "object":
                _leaves(f"{path}[{index}]", item, text, out)
        return

    # Scalars, empty arrays, and arrays of scalars/arrays compare wholesale.
    out[path] = text[node.start:node.end]


def _decode(payload: bytes | bytearray | str) -> str:
    if isinstance(payload, str):
        return payload
    payload = bytes(payload)
    return payload.decode(json.detect_encoding(payload), "surrogatepass")


def flatten(payload: bytes | bytearray | str) -> FlattenedPayload:
    """Flatten a JSON document into ``{leaf_path: raw_leaf_text}``.

    Raises ``ValueError`` (``json.JSONDecodeError`` or ``UnicodeDecodeError``)
    when *payload* is not JSON or is nested too deeply to walk.
    """
    text = _decode(payload)
    out: FlattenedPayload = {}
    try:
        json.loads(text)  # validate; the span scanner assumes well-formed input
        root = _scan(text, _skip_ws(text, 0))
        _leaves("", root, text, out)
    except RecursionError as e:
        raise ValueError("JSON payload is nested too deeply") from e
    return out


def is_structured(payload: bytes | bytearray | str) -> bool:
    """True when *payload* parses as JSON."""
    try:
        json.loads(_decode(payload))
    except (ValueError, RecursionError):
        return False
    return True
