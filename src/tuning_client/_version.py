"""Version information for tuning-client."""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)


def get_version():
    """Get version string."""
    return __version__
