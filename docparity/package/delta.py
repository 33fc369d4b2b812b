"""Entry-level delta and merge engines for PackageDocument."""

from __future__ import annotations

import logging

from docparity.interfaces.delta import THEME_CHANGE, Delta
from docparity.package.models import PackageDocument

logger = logging.getLogger(__name__)

ENTRY_ADDED = "EntryAdded"
ENTRY_REMOVED = "EntryRemoved"
ENTRY_CHANGED = "EntryChanged"


class EntryDeltaEngine:
    """Per-entry structural deltas between two package documents.

    Themes are re-applied on every comparison, so a document carrying a
    theme entry always yields one ``ThemeChange`` delta, even against itself.
    Entropy artifacts never produce deltas.
    """

    def __init__(self, theme_entry: str = "References/Themes.json") -> None:
        self.theme_entry = theme_entry

    def compute_delta(self, doc_a: PackageDocument, doc_b: PackageDocument) -> list[Delta]:
        deltas: list[Delta] = []
        if self.theme_entry in doc_a.entries:
            deltas.append(Delta(kind=THEME_CHANGE, target=self.theme_entry))

        for name in sorted(doc_a.entries.keys() | doc_b.entries.keys()):
            if name not in doc_b.entries:
                deltas.append(Delta(kind=ENTRY_REMOVED, target=name))
            elif name not in doc_a.entries:
                deltas.append(Delta(kind=ENTRY_ADDED, target=name))
            elif doc_a.entries[name] != doc_b.entries[name]:
                deltas.append(Delta(kind=ENTRY_CHANGED, target=name))
        return deltas


class EntryMerger:
    """Per-entry three-way merge. On conflict, *ours* wins."""

    def merge(
        self,
        base: PackageDocument,
        ours: PackageDocument,
        theirs: PackageDocument,
    ) -> PackageDocument:
        return PackageDocument(
            entries=_merge_payloads(base.entries, ours.entries, theirs.entries),
            entropy=_merge_payloads(base.entropy, ours.entropy, theirs.entropy),
        )


def _merge_payloads(
    base: dict[str, bytes],
    ours: dict[str, bytes],
    theirs: dict[str, bytes],
) -> dict[str, bytes]:
    # ours' order first, then anything only theirs introduced
    names = list(ours) + [n for n in theirs if n not in ours] + [
        n for n in base if n not in ours and n not in theirs
    ]
    merged: dict[str, bytes] = {}
    for name in names:
        b, o, t = base.get(name), ours.get(name), theirs.get(name)
        if o == t or t == b:
            result = o
        elif o == b:
            result = t
        else:
            logger.warning("merge conflict on %s, keeping ours", name)
            result = o
        if result is not None:
            merged[name] = result
    return merged
