"""Service identity reported in logs, banners and /health."""

import re
from importlib import metadata
from pathlib import Path

SERVICE_NAME = "route-sync-service"
APP_TITLE = "Route Sync: Resolve, Measure, Share"

_CHANGELOG = Path(__file__).resolve().parent.parent / "CHANGELOG.md"


def _changelog_version() -> str:
    if _CHANGELOG.exists():
        match = re.search(r"##\s*\[(.+?)\]", _CHANGELOG.read_text())
        if match:
            return match.group(1)
    return "unknown"


def _read_version() -> str:
    # a source checkout may run against a stale installed copy; CHANGELOG wins
    version = _changelog_version()
    if version != "unknown":
        return version
    try:
        return metadata.version(SERVICE_NAME)
    except metadata.PackageNotFoundError:
        return "unknown"


VERSION = _read_version()
