"""Load the .env configuration file."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values

from .errors import ConfigIncomplete, ConfigMissing
from .models import CatalogPair, SyncConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.config/photo-sync/.env")
DEFAULT_LOG_DIR = "~/Library/Logs/PhotoSync"
CONFIG_ENV_VAR = "PHOTO_SYNC_CONFIG"

REQUIRED_KEYS = ["BASE_SOURCE", "BASE_DESTINATION"]


def default_config_path() -> Path:
    """Config path from $PHOTO_SYNC_CONFIG, else the per-user default."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_CONFIG_PATH.expanduser()


def parse_catalog_pairs(value: Optional[str]) -> list[CatalogPair]:
    """Parse CATALOG as comma-separated 'source:destination' pairs.

    An entry without a colon keeps the whole entry as its source and gets an
    empty destination, which leaves the pair incomplete.
    """
    if not value:
        return []

    pairs = []
    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        source, _, destination = entry.partition(":")
        pairs.append(CatalogPair(source=source, destination=destination))
    return pairs


def load_config(path: Path) -> SyncConfig:
    """Read a .env file into a SyncConfig.

    Raises ConfigMissing if the file does not exist and ConfigIncomplete if
    BASE_SOURCE or BASE_DESTINATION is empty.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigMissing(path)

    values = {k: (v or "").strip() for k, v in dotenv_values(path).items()}
    logger.debug("Loaded %d keys from %s", len(values), path)

    missing = [key for key in REQUIRED_KEYS if not values.get(key)]
    if missing:
        raise ConfigIncomplete(missing)

    catalogs = parse_catalog_pairs(values.get("CATALOG"))
    for pair in catalogs:
        if not pair.is_complete:
            logger.warning("Ignoring incomplete catalog entry: %r", pair.source)

    return SyncConfig(
        source_root=Path(values["BASE_SOURCE"]).expanduser(),
        destination_root=Path(values["BASE_DESTINATION"]).expanduser(),
        catalogs=tuple(catalogs),
        log_dir=Path(values.get("LOG_DIR") or DEFAULT_LOG_DIR).expanduser(),
        rsync_override=values.get("RSYNC_OVERRIDE") or None,
    )
