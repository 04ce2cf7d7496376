"""
Metadata-driven renaming for media library folders and episode files.

This package reacts to "item metadata changed" notifications from a media
library host and keeps the on-disk names of series, season and movie folders
and episode files in line with the item's resolved metadata.

The package is organized into two parts:
- rename: the coordinator that throttles and dispatches notifications, plus
  the name formatter, episode number parser and provider helpers it uses.
- utils: constants, configuration loading, the collision-safe path mutator
  and structured logging.
"""

__version__ = "1.0.0"

# Debug flag for controlling verbose output
DEBUG: bool = False

__all__ = ["__version__", "DEBUG"]
