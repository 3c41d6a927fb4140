"""Run a single folder sync job."""

from __future__ import annotations

import logging
import os
from typing import Callable

from .models import FolderSyncJob, JobOutcome, JobResult, MirrorResult
from .rsync import RsyncNotFound, build_command, run_rsync, with_trailing_slash

logger = logging.getLogger(__name__)

Invoker = Callable[[list[str]], MirrorResult]


def sync_folder(
    job: FolderSyncJob,
    rsync: str,
    dry_run: bool = False,
    invoker: Invoker = run_rsync,
) -> JobResult:
    """Mirror job.source onto job.destination.

    A missing source is skipped, not failed. A nonzero rsync exit is
    reported and returned; it never raises.
    """
    print(f"\n[SYNCING] {job.label}")

    source = with_trailing_slash(job.source)
    if not os.path.isdir(source):
        print(f"  [SKIP] Source directory does not exist: {source}")
        return JobResult(job=job, outcome=JobOutcome.SKIPPED)

    cmd = build_command(rsync, job, dry_run=dry_run)
    try:
        result = invoker(cmd)
    except RsyncNotFound as e:
        logger.error("%s (%s)", e, job.label)
        return JobResult(job=job, outcome=JobOutcome.FAILED, returncode=127)

    if result.returncode != 0:
        logger.warning("rsync exited %d for %s", result.returncode, job.label)
        return JobResult(job=job, outcome=JobOutcome.FAILED, returncode=result.returncode)

    return JobResult(job=job, outcome=JobOutcome.SYNCED, returncode=0)
