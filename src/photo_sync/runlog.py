"""Run log files: location, 30-day retention, and console tee."""

from __future__ import annotations

import contextlib
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional, TextIO

logger = logging.getLogger(__name__)

LOG_GLOB = "sync_log_*.log"
RETENTION_DAYS = 30


def prepare_log_dir(log_dir: Path) -> Path:
    """Expand ~ and create the log directory if needed."""
    log_dir = Path(log_dir).expanduser()
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def prune_old_logs(
    log_dir: Path,
    max_age_days: int = RETENTION_DAYS,
    now: Optional[float] = None,
) -> list[Path]:
    """Delete sync logs last modified more than max_age_days ago."""
    cutoff = (now if now is not None else time.time()) - max_age_days * 86400
    removed = []
    for path in sorted(Path(log_dir).glob(LOG_GLOB)):
        try:
            if path.is_file() and path.stat().st_mtime < cutoff:
                path.unlink()
                removed.append(path)
        except OSError as e:
            logger.debug("Could not prune %s: %s", path, e)

    if removed:
        logger.debug("Pruned %d old log(s) from %s", len(removed), log_dir)
    return removed


def log_file_path(log_dir: Path, log_name: str, now: datetime) -> Path:
    return Path(log_dir) / f"sync_log_{log_name}_{now.strftime('%Y%m%d_%H%M%S')}.log"


class TeeWriter:
    """Text stream that writes to several streams at once."""

    def __init__(self, *streams: TextIO):
        self.streams = streams

    def write(self, text: str) -> int:
        for stream in self.streams:
            stream.write(text)
        return len(text)

    def flush(self):
        for stream in self.streams:
            stream.flush()

    def isatty(self) -> bool:
        return False


@contextlib.contextmanager
def tee_to(log_path: Path) -> Iterator[TextIO]:
    """Copy everything printed (and logged) inside the block into log_path."""
    package_logger = logging.getLogger("photo_sync")
    with open(log_path, "w", encoding="utf-8") as log_file:
        handler = logging.StreamHandler(log_file)
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        handler.setLevel(logging.WARNING)
        package_logger.addHandler(handler)
        try:
            with contextlib.redirect_stdout(TeeWriter(sys.stdout, log_file)):
                yield log_file
        finally:
            package_logger.removeHandler(handler)
            sys.stdout.flush()
