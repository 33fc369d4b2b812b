"""Tests for the round-trip stress harness."""

from __future__ import annotations

import json
from unittest.mock import MagicMock

import pytest

from docparity.archive import write_archive
from docparity.config.models import ParityConfig
from docparity.errors import EntropyError, ErrorContainer
from docparity.harness import RoundTripStressHarness, create_harness
from docparity.interfaces import Delta
from docparity.package import EntryDeltaEngine, EntryMerger, PackageDocument, PackageModel


class _LossyModel(PackageModel):
    """Drops one entry on every save."""

    def save_to_archive(self, doc, path):
        kept = PackageDocument(
            entries={k: v for k, v in doc.entries.items() if k != "Header.json"},
            entropy=dict(doc.entropy),
        )
        write_archive(kept.to_archive(), path)
        return ErrorContainer()


class _EmptyObjectDroppingModel(PackageModel):
    """Re-serializes Properties.json without its empty-object members."""

    def save_to_archive(self, doc, path):
        saved = doc.copy()
        if "Properties.json" in saved.entries:
            props = json.loads(saved.entries["Properties.json"])
            kept = {k: v for k, v in props.items() if v != {}}
            saved.entries["Properties.json"] = json.dumps(kept).encode()
        write_archive(saved.to_archive(), path)
        return ErrorContainer()


def _harness(model=None, delta_engine=None, merger=None, **kwargs) -> RoundTripStressHarness:
    return RoundTripStressHarness(
        model or PackageModel(),
        delta_engine or EntryDeltaEngine(),
        merger or EntryMerger(),
        **kwargs,
    )


# ── Full pipeline ───────────────────────────────────────────────────


class TestStressTest:
    def test_sample_package_passes(self, harness, sample_zip):
        assert harness.stress_test(sample_zip) is True

    def test_passes_without_entropy(self, harness, make_zip):
        path = make_zip("plain.zip", {"a.json": b'{"x": [1, 2]}', "b.txt": b"hello\n"})
        assert harness.stress_test(path) is True

    def test_checksum_warnings_tolerated(self, harness, make_zip, sample_entries):
        sample_entries["Checksum.json"] = json.dumps({"files": {"Header.json": "0" * 64}}).encode()
        assert harness.stress_test(make_zip("c.zip", sample_entries)) is True

    def test_unsupported_format_fails(self, harness, tmp_path, caplog):
        path = tmp_path / "legacy.msapp"
        path.write_bytes(b"not a zip")
        assert harness.stress_test(path) is False
        assert "Too old" in caplog.text

    def test_missing_file_fails(self, harness, tmp_path):
        assert harness.stress_test(tmp_path / "missing.zip") is False

    def test_lossy_save_fails(self, sample_zip):
        assert _harness(_LossyModel()).stress_test(sample_zip) is False

    def test_dropped_empty_object_fails(self, make_zip):
        path = make_zip("p.zip", {"Properties.json": b'{"a": {}, "b": 1}'})
        assert _harness(_EmptyObjectDroppingModel()).stress_test(path) is False

    def test_name_collision_fails_comparison(self, harness, make_zip):
        with pytest.warns(UserWarning):
            path = make_zip("dup.zip", [("a.json", b"{}"), ("a.json", b"[]")])
        assert harness.stress_test(path) is False

    def test_temp_files_cleaned_up(self, harness, sample_zip, tmp_path, monkeypatch):
        scratch = tmp_path / "scratch"
        scratch.mkdir()
        monkeypatch.setattr("tempfile.tempdir", str(scratch))
        assert harness.stress_test(sample_zip) is True
        assert list(scratch.iterdir()) == []


# ── Individual properties ───────────────────────────────────────────


class TestProperties:
    def test_clone(self, harness, sample_zip):
        assert harness.test_clone(sample_zip) is True

    def test_diff_stress(self, harness, sample_zip):
        assert harness.diff_stress_test(sample_zip) is True

    def test_merge_stress_two_packages(self, harness, make_zip, sample_entries):
        other = dict(sample_entries)
        other["Header.json"] = b'{"DocVersion": "2.0", "MinVersionToLoad": "1.0"}'
        other["Controls/Screen2.json"] = b'{"TopParent": {"Name": "Screen2"}}'
        del other["Assets/logo.png"]
        first = make_zip("first.zip", sample_entries)
        second = make_zip("second.zip", other)
        assert harness.merge_stress_test(first, second) is True

    def test_merge_stress_same_package(self, harness, sample_zip):
        assert harness.merge_stress_test(sample_zip, sample_zip) is True

    def test_merge_stress_detects_broken_merger(self, sample_zip, make_zip):
        merger = MagicMock()
        merger.merge.return_value = PackageDocument(entries={"a.json": b"{}"})
        other = make_zip("other.zip", {"a.json": b"{}"})
        assert _harness(merger=merger).merge_stress_test(sample_zip, other) is False

    def test_baseline_deltas_required_to_be_filtered(self, sample_zip):
        strict_harness = _harness(baseline_delta_kinds=())
        assert strict_harness.diff_stress_test(sample_zip) is False

    def test_unexpected_delta_fails(self, sample_zip, caplog):
        engine = MagicMock()
        engine.compute_delta.return_value = [Delta(kind="ControlMoved", target="Label1")]
        assert _harness(delta_engine=engine).diff_stress_test(sample_zip) is False
        assert "unexpected delta: ControlMoved Label1" in caplog.text

    def test_faults_become_false(self, sample_zip, caplog):
        model = MagicMock(spec=PackageModel)
        model.load_from_archive.return_value = (PackageDocument(), ErrorContainer())
        model.clone.side_effect = RuntimeError("boom")
        assert _harness(model).test_clone(sample_zip) is False
        assert "test_clone failed" in caplog.text


# ── Entropy stripping and document comparison ──────────────────────


class TestHelpers:
    def test_remove_entropy(self, harness, sample_zip):
        stripped = harness.remove_entropy(sample_zip)
        assert stripped.entropy == {}
        assert "Header.json" in stripped.entries

    def test_remove_entropy_requires_entropy_dir(self, sample_zip):
        model = MagicMock(spec=PackageModel)
        model.load_from_archive.return_value = (PackageDocument(), ErrorContainer())
        model.save_to_tree.return_value = ErrorContainer()
        with pytest.raises(EntropyError, match="Missing entropy dir"):
            _harness(model).remove_entropy(sample_zip)

    def test_compare_documents(self, harness):
        a = PackageDocument(entries={"a.json": b'{"x": 1}'})
        b = PackageDocument(entries={"a.json": b'{"x": 2}'})
        assert harness.compare_documents(a, a.copy()) is True
        assert harness.compare_documents(a, b) is False

    def test_has_no_deltas_lenient_ignores_entropy(self, harness):
        a = PackageDocument(entries={"a.json": b"{}"}, entropy={"Entropy.json": b'{"t": 1}'})
        b = PackageDocument(entries={"a.json": b"{}"}, entropy={"Entropy.json": b'{"t": 2}'})
        assert harness.has_no_deltas(a, b) is True
        assert harness.has_no_deltas(a, b, strict=True) is False

    def test_compare_files_logs_diagnostics(self, harness, make_zip, caplog):
        a = make_zip("a.zip", {"a.json": b'{"x": 1}'})
        b = make_zip("b.zip", {"a.json": b'{"x": 2}'})
        assert harness.compare_files(a, b) is False
        assert "CHANGED a.json: x" in caplog.text


def test_create_harness_uses_config():
    cfg = ParityConfig(harness={"entropy_dir": "Noise", "baseline_delta_kinds": []})
    harness = create_harness(cfg)
    assert harness.entropy_dir == "Noise"
    assert harness.model.entropy_dir == "Noise"
    assert harness.baseline_delta_kinds == frozenset()
