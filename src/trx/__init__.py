"""Filtering-aware directory tree listing.

This package scans a directory, applies hidden-file, glob and .gitignore
rules, and renders the surviving entries as an indented text tree, JSON
or HTML.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("trx")
except PackageNotFoundError:
    __version__ = "unknown"
