from __future__ import annotations

from importlib import metadata

DIST_NAME = "legal-automator"

# Reported when running from a source checkout that was never installed
UNKNOWN_VERSION = "0.0.0"


def tool_version() -> str:
    """Version of the installed legal-automator distribution."""
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return UNKNOWN_VERSION


__all__ = ["tool_version", "DIST_NAME"]
