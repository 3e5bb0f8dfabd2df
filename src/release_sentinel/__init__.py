"""Top-level package for release-sentinel.

License: GPL-3.0
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("release-sentinel")
except PackageNotFoundError:
    # Source checkout without an installed distribution
    __version__ = "dev"
