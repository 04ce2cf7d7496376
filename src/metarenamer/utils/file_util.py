"""
Filesystem helpers and the collision-safe path mutator.

This module contains the name sanitizer used by the formatter, path
comparison helpers used for flat-layout detection, and ``PathMutator``: the
only place in the package that renames, moves or creates entries on disk.

Every ``PathMutator`` operation follows the same pattern:
- compute the destination,
- report ``UNCHANGED`` when nothing would change,
- refuse with ``SKIP`` when the destination is already taken (never overwrite),
- report ``DRY-RUN`` without touching the disk when ``dry_run`` is set,
- otherwise mutate and report success, or ``FAIL`` with the I/O error text.

Errors are returned as ``RenameResult`` values and never raised.
"""
import os
import re
import shutil
from pathlib import Path

from metarenamer.models import RenameResult
from metarenamer.utils import logger, LogLevel
from metarenamer.utils.constants import (
    CONTROL_CHARS_REGEX,
    INVALID_FILENAME_CHARS,
    STATUS_CREATED,
    STATUS_DRY_RUN,
    STATUS_FAIL,
    STATUS_MOVED,
    STATUS_RENAMED,
    STATUS_SKIP,
    STATUS_UNCHANGED,
)


def sanitize_filename(name: str) -> str:
    """
    Remove invalid filesystem characters from a name.
    Uses str.translate() for optimal performance.
    """
    translation_table = str.maketrans('', '', INVALID_FILENAME_CHARS)
    cleaned = CONTROL_CHARS_REGEX.sub("", name.translate(translation_table))
    return re.sub(r"\s+", " ", cleaned).strip()


def normalize_text(text: str) -> str:
    """Normalize text by replacing separators with spaces and collapsing whitespace."""
    text = text.replace("_", " ").replace(".", " ")
    return re.sub(r"\s+", " ", text).strip()


def normalize_path(path: str | Path) -> str:
    """Normalize separators, trailing slashes and case so two spellings of a directory compare equal."""
    text = str(path).replace("\\", "/")
    text = re.sub(r"/+", "/", text)
    if len(text) > 1:
        text = text.rstrip("/")
    return text.lower()


def same_directory(first: str | Path, second: str | Path) -> bool:
    return normalize_path(first) == normalize_path(second)


def _same_entry(first: Path, second: Path) -> bool:
    """True when both paths name one on-disk entry (case-only renames on case-insensitive filesystems)."""
    try:
        return os.path.samefile(first, second)
    except OSError:
        return False


class PathMutator:
    """Performs or simulates single-entry renames, moves and directory creation."""

    def rename_folder(self, current_path: str | Path, desired_name: str, dry_run: bool) -> RenameResult:
        """
        Rename a directory in place to ``desired_name``.

        Parameters:
        - current_path (str | Path): Existing directory.
        - desired_name (str): New folder name (no separators).
        - dry_run (bool): Report the rename without performing it.

        Returns:
        - RenameResult: UNCHANGED, SKIP (target exists), DRY-RUN, RENAMED or FAIL.
        """
        source = Path(current_path)
        if source.parent == source:
            return RenameResult(STATUS_FAIL, str(source), None, "cannot rename a filesystem root")
        target = source.parent / desired_name
        return self._rename(source, target, dry_run, kind="folder")

    def rename_file(self, current_path: str | Path, desired_stem: str, dry_run: bool) -> RenameResult:
        """Rename a regular file to ``desired_stem`` keeping its original extension unchanged."""
        source = Path(current_path)
        if not dry_run and not source.is_file():
            return RenameResult(STATUS_FAIL, str(source), None, "source is not a regular file")
        target = source.parent / f"{desired_stem}{source.suffix}"
        return self._rename(source, target, dry_run, kind="file")

    def move_file(self, current_path: str | Path, target_dir: str | Path, dry_run: bool) -> RenameResult:
        """Move a file into ``target_dir`` under its current name."""
        source = Path(current_path)
        target = Path(target_dir) / source.name

        if target.exists() or target.is_symlink():
            return RenameResult(STATUS_SKIP, str(source), str(target), "target exists")

        if dry_run:
            logger.log("mutate.move", LogLevel.INFO, dry_run=True, source=str(source), target=str(target))
            return RenameResult(STATUS_DRY_RUN, str(source), str(target), "would move")

        try:
            shutil.move(str(source), str(target))
        except (OSError, shutil.Error) as e:
            return RenameResult(STATUS_FAIL, str(source), str(target), f"move error: {e}")

        logger.log("mutate.move", LogLevel.INFO, dry_run=False, source=str(source), target=str(target))
        return RenameResult(STATUS_MOVED, str(source), str(target))

    def create_directory(self, path: str | Path, dry_run: bool) -> RenameResult:
        """Create ``path`` (and missing parents) unless it already exists."""
        target = Path(path)
        if target.is_dir():
            return RenameResult(STATUS_UNCHANGED, None, str(target), "directory exists")
        if target.exists():
            return RenameResult(STATUS_SKIP, None, str(target), "target exists")

        if dry_run:
            logger.log("mutate.create", LogLevel.INFO, dry_run=True, target=str(target))
            return RenameResult(STATUS_DRY_RUN, None, str(target), "would create")

        try:
            target.mkdir(parents=True)
        except OSError as e:
            return RenameResult(STATUS_FAIL, None, str(target), f"create error: {e}")

        logger.log("mutate.create", LogLevel.INFO, dry_run=False, target=str(target))
        return RenameResult(STATUS_CREATED, None, str(target))

    def _rename(self, source: Path, target: Path, dry_run: bool, kind: str) -> RenameResult:
        if source.name == target.name:
            return RenameResult(STATUS_UNCHANGED, str(source), str(target), "no change needed")

        if (target.exists() or target.is_symlink()) and not _same_entry(source, target):
            return RenameResult(STATUS_SKIP, str(source), str(target), "target exists")

        if dry_run:
            logger.log("mutate.rename", LogLevel.INFO, kind=kind, dry_run=True, source=str(source), target=str(target))
            return RenameResult(STATUS_DRY_RUN, str(source), str(target), "would rename")

        try:
            source.rename(target)
        except OSError as e:
            return RenameResult(STATUS_FAIL, str(source), str(target), f"rename error: {e}")

        logger.log("mutate.rename", LogLevel.INFO, kind=kind, dry_run=False, source=str(source), target=str(target))
        return RenameResult(STATUS_RENAMED, str(source), str(target))
