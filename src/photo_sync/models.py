"""Data models for photo-sync."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class CatalogPair:
    """One catalog directory and where it is mirrored to."""

    source: str
    destination: str

    @property
    def is_complete(self) -> bool:
        """Both sides must be set before the pair is scheduled."""
        return bool(self.source) and bool(self.destination)

    @property
    def label(self) -> str:
        return f"Catalog: {os.path.basename(self.source.rstrip('/'))}"


@dataclass(frozen=True)
class SyncConfig:
    """Settings loaded from the .env file."""

    source_root: Path
    destination_root: Path
    catalogs: tuple[CatalogPair, ...] = ()
    log_dir: Path = Path("~/Library/Logs/PhotoSync")
    rsync_override: Optional[str] = None


@dataclass(frozen=True)
class RunOptions:
    """Options for a single run, from the command line."""

    year: Optional[str] = None
    dry_run: bool = False
    skip_catalog: bool = False

    def __post_init__(self):
        if self.year is not None and (
            "/" in self.year or self.year in ("", ".", "..")
        ):
            raise ValueError(f"Year must be a single directory name, got: {self.year!r}")

    @property
    def log_name(self) -> str:
        return self.year or "all"


@dataclass(frozen=True)
class FolderSyncJob:
    """A source folder to mirror onto a destination folder."""

    source: str
    destination: str
    label: str


@dataclass
class MirrorResult:
    """Exit status and combined output of one rsync invocation."""

    returncode: int
    output: str = ""


class JobOutcome(Enum):
    """What happened to a folder sync job."""

    SYNCED = "synced"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class JobResult:
    job: FolderSyncJob
    outcome: JobOutcome
    returncode: Optional[int] = None


@dataclass
class RunSummary:
    """Per-job results of a run."""

    results: list[JobResult] = field(default_factory=list)

    def add(self, result: JobResult):
        self.results.append(result)

    def count(self, outcome: JobOutcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)

    @property
    def synced(self) -> int:
        return self.count(JobOutcome.SYNCED)

    @property
    def skipped(self) -> int:
        return self.count(JobOutcome.SKIPPED)

    @property
    def failed(self) -> int:
        return self.count(JobOutcome.FAILED)
