"""Orchestrate a full run: photos, then catalogs, all captured to a log file."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from .models import FolderSyncJob, RunOptions, RunSummary, SyncConfig
from .rsync import run_rsync
from .runlog import log_file_path, prepare_log_dir, prune_old_logs, tee_to
from .syncer import Invoker, sync_folder

logger = logging.getLogger(__name__)


def _timestamp(now: datetime) -> str:
    return now.strftime("%a %b %d %H:%M:%S %Y")


def photo_job(config: SyncConfig, options: RunOptions) -> FolderSyncJob:
    """Whole photos tree, or just photos/<year> when a year is given."""
    source = config.source_root / "photos"
    destination = config.destination_root / "photos"
    if options.year:
        return FolderSyncJob(
            source=str(source / options.year),
            destination=str(destination / options.year),
            label=f"Photos - Year {options.year}",
        )
    return FolderSyncJob(
        source=str(source),
        destination=str(destination),
        label="Photos - ALL Years",
    )


def catalog_jobs(config: SyncConfig) -> list[FolderSyncJob]:
    return [
        FolderSyncJob(source=pair.source, destination=pair.destination, label=pair.label)
        for pair in config.catalogs
        if pair.is_complete
    ]


def print_header(config: SyncConfig, options: RunOptions, rsync: str, started: datetime):
    print("--- Photo Sync Tool ---")
    print(f"[RSYNC]  Using: {rsync}")
    print(f"[DEST]   NAS: {config.destination_root}")
    print("[DELETE] Enabled - files deleted from source will be removed from NAS")
    if options.skip_catalog:
        print("[CATALOG] Skipped (--no-catalog flag set)")
    print("[MODE]   DRY RUN" if options.dry_run else "[MODE]   LIVE SYNC")
    print(f"=== Sync started at {_timestamp(started)} ===")


def print_summary(summary: RunSummary, log_path, finished: datetime):
    print("\n=== Final Summary ===")
    print(f"Jobs: {summary.synced} synced, {summary.skipped} skipped, {summary.failed} failed")
    for result in summary.results:
        if result.returncode not in (None, 0):
            print(f"  {result.job.label}: rsync exit {result.returncode}")
    print(f"Logs stored at: {log_path}")
    print(f"=== Sync completed at {_timestamp(finished)} ===")


def run(
    config: SyncConfig,
    options: RunOptions,
    rsync: str,
    invoker: Invoker = run_rsync,
    now: Optional[Callable[[], datetime]] = None,
) -> int:
    """Sync photos and catalogs, teeing all output into a new log file.

    Each folder sync is independent; failures are reported in the summary
    but do not stop the run or change the exit code.
    """
    now = now or datetime.now

    log_dir = prepare_log_dir(config.log_dir)
    prune_old_logs(log_dir)

    started = now()
    log_path = log_file_path(log_dir, options.log_name, started)
    summary = RunSummary()

    with tee_to(log_path):
        print_header(config, options, rsync, started)

        summary.add(sync_folder(photo_job(config, options), rsync, options.dry_run, invoker))

        if options.skip_catalog:
            print("\n[CATALOG] Skipping catalog sync (--no-catalog flag set)")
        else:
            for job in catalog_jobs(config):
                summary.add(sync_folder(job, rsync, options.dry_run, invoker))

        print_summary(summary, log_path, now())

    print("\n--- Process Complete ---")
    logger.debug("Run finished: %d job(s), %d failed", len(summary.results), summary.failed)
    return 0
