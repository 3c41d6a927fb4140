"""Pick which rsync binary to run."""

from __future__ import annotations

import logging
import os
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

# Homebrew builds first: the system rsync on macOS lacks --info=progress2
RSYNC_CANDIDATES = [
    "/opt/homebrew/bin/rsync",
    "/usr/local/bin/rsync",
]
DEFAULT_RSYNC = "rsync"


def resolve_rsync(
    override: Optional[str] = None,
    candidates: Sequence[str] = RSYNC_CANDIDATES,
) -> str:
    """Return the override, the first executable candidate, or plain 'rsync'.

    The fallback is looked up on PATH at invocation time and is not checked here.
    """
    if override:
        logger.debug("Using RSYNC_OVERRIDE: %s", override)
        return override

    for candidate in candidates:
        if os.path.isfile(candidate) and os.access(candidate, os.X_OK):
            return candidate

    return DEFAULT_RSYNC
