"""Shared test fixtures for photo-sync."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path

import pytest

from photo_sync.models import CatalogPair, MirrorResult, SyncConfig


class FakeInvoker:
    """Records rsync commands instead of running them."""

    def __init__(self, returncode: int = 0, output: str = ""):
        self.returncode = returncode
        self.output = output
        self.calls: list[list[str]] = []

    def __call__(self, cmd: list[str]) -> MirrorResult:
        self.calls.append(cmd)
        if self.output:
            print(self.output)
        return MirrorResult(returncode=self.returncode, output=self.output)

    @property
    def pairs(self) -> list[tuple[str, str]]:
        """(source, destination) of each call."""
        return [(cmd[-2], cmd[-1]) for cmd in self.calls]


@pytest.fixture
def tmp_dir():
    """Create a temporary directory for tests."""
    d = tempfile.mkdtemp(prefix="photo-sync-test-")
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def fake_invoker():
    return FakeInvoker()


@pytest.fixture
def make_invoker():
    """Factory for fake invokers with a given exit code."""
    return FakeInvoker


@pytest.fixture
def library(tmp_dir):
    """Source tree with photos for two years and a catalog folder."""
    source = tmp_dir / "library"
    for year in ("2019", "2020"):
        year_dir = source / "photos" / year
        year_dir.mkdir(parents=True)
        (year_dir / f"IMG_{year}.jpg").write_bytes(b"jpeg" * 10)
    catalog = tmp_dir / "Lightroom"
    catalog.mkdir()
    (catalog / "catalog.lrcat").write_text("catalog")
    return source


@pytest.fixture
def make_config(tmp_dir, library):
    """Factory for a SyncConfig rooted in tmp_dir."""

    def _make(catalogs: tuple = None) -> SyncConfig:
        destination = tmp_dir / "nas"
        destination.mkdir(exist_ok=True)
        if catalogs is None:
            catalogs = (
                CatalogPair(str(tmp_dir / "Lightroom"), str(destination / "catalogs" / "Lightroom")),
            )
        return SyncConfig(
            source_root=library,
            destination_root=destination,
            catalogs=tuple(catalogs),
            log_dir=tmp_dir / "logs",
        )

    return _make


@pytest.fixture
def write_env(tmp_dir):
    """Factory fixture that writes a .env file and returns its path."""

    def _write(content: str, name: str = ".env") -> Path:
        path = tmp_dir / name
        path.write_text(content)
        return path

    return _write
