"""rsync subprocess wrapper: command builder and a streaming runner."""

from __future__ import annotations

import io
import logging
import subprocess

from .models import FolderSyncJob, MirrorResult

logger = logging.getLogger(__name__)

# Archive, verbose, human-readable sizes
BASE_FLAGS = ["-avh"]

# Compare by size only, mirror deletions, write in place
MIRROR_FLAGS = [
    "--size-only",
    "--delete",
    "--inplace",
    "--info=progress2",
    "--stats",
]

# Bookkeeping files macOS and Windows leave on volumes and in folders
EXCLUDES = [
    ".DS_Store",
    "._*",
    ".Spotlight-V100",
    ".Trashes",
    ".fseventsd",
    ".TemporaryItems",
    ".DocumentRevisions-V100",
    ".VolumeIcon.icns",
    "Thumbs.db",
]


class RsyncNotFound(RuntimeError):
    """The resolved rsync binary could not be executed."""


def with_trailing_slash(path: str) -> str:
    """Normalize to exactly one trailing slash so rsync copies the contents."""
    return str(path).rstrip("/") + "/"


def build_command(rsync: str, job: FolderSyncJob, dry_run: bool = False) -> list[str]:
    """Assemble the rsync argument list for one folder sync job."""
    cmd = [rsync]
    cmd.extend(BASE_FLAGS)
    if dry_run:
        cmd.append("--dry-run")
    cmd.extend(MIRROR_FLAGS)
    cmd.extend(f"--exclude={pattern}" for pattern in EXCLUDES)
    cmd.append(with_trailing_slash(job.source))
    cmd.append(with_trailing_slash(job.destination))
    return cmd


def run_rsync(cmd: list[str]) -> MirrorResult:
    """Run rsync, echoing its output live and returning it with the exit code.

    stderr is merged into stdout so errors land in the run log in order.
    Raises RsyncNotFound if the binary is missing or cannot be executed.
    No timeout is applied.
    """
    logger.debug("Running: %s", " ".join(cmd))
    try:
        proc = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
        )
    except FileNotFoundError:
        raise RsyncNotFound(f"rsync not found: {cmd[0]}")
    except OSError as e:
        raise RsyncNotFound(f"cannot run rsync {cmd[0]}: {e.strerror or e}")

    # newline="" keeps progress2 carriage returns intact
    lines = []
    with proc:
        stream = io.TextIOWrapper(proc.stdout, encoding="utf-8", errors="replace", newline="")
        for line in stream:
            print(line, end="", flush=True)
            lines.append(line)
    return MirrorResult(returncode=proc.returncode, output="".join(lines))
