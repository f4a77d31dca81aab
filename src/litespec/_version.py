"""Installed LiteSpec version."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version

UNKNOWN_VERSION = "0.0.0+unknown"


def get_version() -> str:
    """Version of the installed ``litespec`` distribution."""
    try:
        return _metadata_version("litespec")
    except PackageNotFoundError:
        return UNKNOWN_VERSION
