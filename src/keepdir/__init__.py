"""Keepfile maintenance for empty directories.

This package reconciles a directory tree against a simple convention: every
directory without any other entries holds a single empty keepfile, and no
other directory does. Tools that only track files (e.g., version control
systems) can then represent empty directories.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("keepdir")
except PackageNotFoundError:
    __version__ = "unknown"
