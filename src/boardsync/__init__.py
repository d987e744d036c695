"""boardsync - Sync issues and pull requests into a GitHub Projects board."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the package version."""
    return __version__
