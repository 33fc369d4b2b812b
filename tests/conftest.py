"""Shared test fixtures for docparity."""

import logging
import zipfile
from pathlib import Path

import pytest

from docparity.archive import Archive
from docparity.config.models import ParityConfig
from docparity.harness import create_harness
from docparity.package import EntryDeltaEngine, EntryMerger, PackageModel


SAMPLE_ENTRIES: dict[str, bytes] = {
    "Header.json": b'{"DocVersion": "1.2", "MinVersionToLoad": "1.0"}',
    "Properties.json": (
        b'{"Name": "Demo", "Size": {"Width": 640, "Height": 480}, "Tags": ["a", "b"]}'
    ),
    "Controls/Screen1.json": (
        b'{"TopParent": {"Name": "Screen1", "Children": ['
        b'{"Name": "Label1", "X": 10}, {"Name": "Button1", "X": 20}]}}'
    ),
    "References/Themes.json": b'{"CurrentTheme": "default"}',
    "Entropy.json": b'{"OrderXY": {"Label1": 3}, "Stamp": "2024-01-01T00:00:00Z"}',
    "Assets/logo.png": b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDRbinary",
}


def write_zip(path: Path, entries: dict[str, bytes] | list[tuple[str, bytes]]) -> Path:
    """Write a zip file with the given entries in the given order."""
    items = entries.items() if isinstance(entries, dict) else entries
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in items:
            zf.writestr(name, data)
    return path


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch):
    monkeypatch.delenv("DOCPARITY_CONFIG", raising=False)


@pytest.fixture(autouse=True)
def _reset_logging():
    """CLI runs reconfigure the package logger; restore it so caplog sees records."""
    log = logging.getLogger("docparity")
    handlers, level, propagate = list(log.handlers), log.level, log.propagate
    yield
    log.handlers[:] = handlers
    log.setLevel(level)
    log.propagate = propagate


@pytest.fixture
def sample_entries() -> dict[str, bytes]:
    return dict(SAMPLE_ENTRIES)


@pytest.fixture
def sample_archive(sample_entries) -> Archive:
    return Archive.from_mapping(sample_entries)


@pytest.fixture
def make_zip(tmp_path):
    """Factory: make_zip("name.zip", entries) -> Path."""

    def _make(name: str, entries) -> Path:
        return write_zip(tmp_path / name, entries)

    return _make


@pytest.fixture
def sample_zip(make_zip, sample_entries) -> Path:
    return make_zip("sample.zip", sample_entries)


@pytest.fixture
def sample_config() -> ParityConfig:
    return ParityConfig()


@pytest.fixture
def package_model() -> PackageModel:
    return PackageModel()


@pytest.fixture
def harness(sample_config):
    return create_harness(sample_config)


@pytest.fixture
def delta_engine() -> EntryDeltaEngine:
    return EntryDeltaEngine()


@pytest.fixture
def merger() -> EntryMerger:
    return EntryMerger()
