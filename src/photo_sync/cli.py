"""CLI entry point: validate the setup, then run the sync."""

from __future__ import annotations

import logging
import sys

import click

from .config import CONFIG_ENV_VAR, default_config_path, load_config
from .errors import PhotoSyncError
from .models import RunOptions
from .mount import check_destination
from .runner import run
from .tool import resolve_rsync


class _Command(click.Command):
    """click.Command that exits 1, not 2, on usage errors."""

    def parse_args(self, ctx, args):
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            e.exit_code = 1
            raise


def _parse_year(ctx, param, value):
    """Reject years that are not a single directory name under photos/."""
    if not value:
        return None
    try:
        RunOptions(year=value)
    except ValueError as e:
        raise click.BadParameter(str(e))
    return value


def _setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


@click.command(cls=_Command, context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--year", "-y", default=None, metavar="YEAR", callback=_parse_year,
              help="Sync specific year only")
@click.option("--dry-run", "-d", is_flag=True,
              help="Preview changes without syncing")
@click.option("--no-catalog", is_flag=True,
              help="Skip catalog synchronization")
@click.option("--config", "config_path", default=None, type=click.Path(dir_okay=False),
              help=f"Path to the .env config file (default: ${CONFIG_ENV_VAR} "
                   "or ~/.config/photo-sync/.env)")
@click.option("--verbose", "-v", is_flag=True,
              help="Enable debug logging")
@click.version_option(package_name="photo-sync")
def main(year, dry_run, no_catalog, config_path, verbose):
    """photo-sync: mirror the photo library and catalogs to a NAS with rsync."""
    _setup_logging(verbose)

    try:
        config = load_config(config_path or default_config_path())
        check_destination(config.destination_root)
    except PhotoSyncError as e:
        raise click.ClickException(str(e))

    options = RunOptions(year=year, dry_run=dry_run, skip_catalog=no_catalog)
    rsync = resolve_rsync(config.rsync_override)

    sys.exit(run(config, options, rsync))
