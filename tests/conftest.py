"""Shared fixtures: a controllable clock and a mutator that records calls."""
from datetime import datetime, timedelta, timezone

import pytest

from metarenamer.models import RenameResult
from metarenamer.utils import logger
from metarenamer.utils.constants import STATUS_DRY_RUN, STATUS_MOVED, STATUS_RENAMED, STATUS_CREATED


class FakeClock:
    """Clock whose time only moves when a test advances it."""

    def __init__(self):
        self.now = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, seconds: float):
        self.now += timedelta(seconds=seconds)


class RecordingMutator:
    """Stands in for PathMutator; records every call and never touches the disk."""

    def __init__(self):
        self.calls = []

    def rename_folder(self, current_path, desired_name, dry_run):
        self.calls.append(("rename_folder", str(current_path), desired_name, dry_run))
        return RenameResult(STATUS_DRY_RUN if dry_run else STATUS_RENAMED, str(current_path), desired_name)

    def rename_file(self, current_path, desired_stem, dry_run):
        self.calls.append(("rename_file", str(current_path), desired_stem, dry_run))
        return RenameResult(STATUS_DRY_RUN if dry_run else STATUS_RENAMED, str(current_path), desired_stem)

    def move_file(self, current_path, target_dir, dry_run):
        self.calls.append(("move_file", str(current_path), str(target_dir), dry_run))
        return RenameResult(STATUS_DRY_RUN if dry_run else STATUS_MOVED, str(current_path), str(target_dir))

    def create_directory(self, path, dry_run):
        self.calls.append(("create_directory", str(path), dry_run))
        return RenameResult(STATUS_DRY_RUN if dry_run else STATUS_CREATED, None, str(path))

    def names(self, operation):
        return [call for call in self.calls if call[0] == operation]


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mutator():
    return RecordingMutator()


@pytest.fixture(autouse=True)
def reset_log_level():
    level = logger.get_log_level()
    yield
    logger.set_log_level(level)
