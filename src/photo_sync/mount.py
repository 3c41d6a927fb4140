"""Destination safety check: refuse to sync onto an unmounted NAS path.

The check is a heuristic: bind or loop mounts that share the root device
are reported as unmounted.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from pathlib import Path
from typing import Iterable, Optional

from .errors import UnmountedDestination

logger = logging.getLogger(__name__)

# "<device> on <point> type <fs> (...)" on Linux, "<device> on <point> (...)" on macOS/BSD
_MOUNT_LINE = re.compile(r" on (?P<point>.+?) (?:type \S+ )?\(")


def parse_mount_output(output: str) -> list[str]:
    """Extract mount points from `mount` output."""
    points = []
    for line in output.splitlines():
        match = _MOUNT_LINE.search(line)
        if match:
            points.append(match.group("point"))
    return points


def list_mount_points() -> list[str]:
    """Return currently mounted filesystems, or [] if `mount` can't be run."""
    try:
        result = subprocess.run(
            ["mount"],
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug("Could not list mounts: %s", e)
        return []

    if result.returncode != 0:
        logger.debug("mount exited %d: %s", result.returncode, result.stderr.strip())
        return []

    return parse_mount_output(result.stdout)


def _strip_trailing(path: str) -> str:
    stripped = path.rstrip("/")
    return stripped or "/"


def is_listed_mount(path: str, mount_points: Iterable[str]) -> bool:
    """True if path is a mount point other than / or lies under one."""
    path = _strip_trailing(path)
    for point in mount_points:
        point = _strip_trailing(point)
        if point == "/":
            continue
        if path == point or path.startswith(point + "/"):
            return True
    return False


def same_device_as_root(path: str) -> bool:
    return os.stat(path).st_dev == os.stat("/").st_dev


def check_destination(
    path: Path | str,
    mount_points: Optional[Iterable[str]] = None,
) -> None:
    """Raise UnmountedDestination unless path is on a mounted volume.

    path must be an existing directory. It passes if listed in (or under)
    the mount table, otherwise only if it is on a different device than /.
    """
    path = _strip_trailing(str(path))
    if path == "/":
        raise UnmountedDestination(path)

    if mount_points is None:
        mount_points = list_mount_points()

    if not os.path.isdir(path):
        raise UnmountedDestination(path)

    if is_listed_mount(path, mount_points):
        logger.debug("Destination %s is on a listed mount", path)
        return

    if same_device_as_root(path):
        raise UnmountedDestination(path)

    logger.debug("Destination %s is on a separate device", path)
