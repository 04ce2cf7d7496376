"""
A module providing constants, configuration, filesystem and logging utilities
for metadata-driven renaming.

This module includes the status codes and default templates shared across the
package, the configuration snapshot and its loaders, the collision-safe path
mutator, and a structured logging mechanism for safe and controlled outputs.
"""

from .constants import (
    DEFAULT_COOLDOWN_SECONDS,
    EMPTY_PROVIDER_HASH,
    ENV_PREFIX,
    GLOBAL_MIN_INTERVAL_SECONDS,
    STATUS_CREATED,
    STATUS_DRY_RUN,
    STATUS_FAIL,
    STATUS_MOVED,
    STATUS_RENAMED,
    STATUS_SKIP,
    STATUS_UNCHANGED,
)
from .logger import LogLevel

__all__ = [
    "DEFAULT_COOLDOWN_SECONDS",
    "EMPTY_PROVIDER_HASH",
    "ENV_PREFIX",
    "GLOBAL_MIN_INTERVAL_SECONDS",
    "STATUS_CREATED",
    "STATUS_DRY_RUN",
    "STATUS_FAIL",
    "STATUS_MOVED",
    "STATUS_RENAMED",
    "STATUS_SKIP",
    "STATUS_UNCHANGED",
    "LogLevel",
]
