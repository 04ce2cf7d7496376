"""Tests for event replay and the command line interface."""
import io
import json
import os

import pytest

from metarenamer.cli import iter_notifications, main
from metarenamer.models import ItemChangedNotification, ItemKind, MediaItem
from metarenamer.rename.batch import replay_events
from metarenamer.rename.core import RenameCoordinator
from metarenamer.utils.config import RenameConfig
from metarenamer.utils.constants import STATUS_DRY_RUN, STATUS_SKIP


def series_line(folder, item_id="s1"):
    return json.dumps({
        "item": {
            "Id": item_id,
            "Type": "Series",
            "Name": "The Flash",
            "Path": str(folder),
            "ProviderIds": {"Tvdb": "279121"},
            "ProductionYear": 2014,
        },
        "library_name": "TV",
    })


@pytest.fixture
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("METARENAMER_"):
            monkeypatch.delenv(key)


class TestReplayEvents:
    """Test cases for replay_events."""

    def test_counts_outcomes(self, tmp_path, clock, mutator):
        first = tmp_path / "a"
        second = tmp_path / "b"
        first.mkdir()
        second.mkdir()
        events = [
            ItemChangedNotification(MediaItem(id="a", kind=ItemKind.SERIES, name="A", path=str(first),
                                              provider_ids={"Tvdb": "1"})),
            ValueError("line 2: item has no id"),
            ItemChangedNotification(MediaItem(id="b", kind=ItemKind.SERIES, name="B", path=str(second),
                                              provider_ids={})),
        ]
        coordinator = RenameCoordinator(mutator=mutator, clock=clock, global_min_interval=0)

        totals = replay_events(coordinator, events, RenameConfig(), progress=False)

        assert totals[STATUS_DRY_RUN] == 1
        assert totals[STATUS_SKIP] == 2
        assert len(mutator.calls) == 1


class TestIterNotifications:
    """Test cases for iter_notifications."""

    def test_parses_lines_and_reports_bad_ones(self, tmp_path):
        stream = io.StringIO("\n".join([series_line(tmp_path), "", "{broken", '{"item": {}}']))
        records = list(iter_notifications(stream))

        assert len(records) == 3
        assert isinstance(records[0], ItemChangedNotification)
        assert records[0].library_name == "TV"
        assert isinstance(records[1], ValueError)
        assert str(records[1]).startswith("line 3:")
        assert str(records[2]).startswith("line 4:")


class TestMain:
    """Test cases for the metarenamer command."""

    def test_render(self, capsys):
        code = main(["render", "{Name} ({Year}) [{Provider}-{Id}]", "--name", "The Flash",
                     "--provider", "Tvdb", "--id", "279121"])
        assert code == 0
        assert capsys.readouterr().out.strip().endswith("The Flash [tvdb-279121]")

    def test_replay_dry_run_leaves_disk_alone(self, tmp_path, clean_env):
        folder = tmp_path / "the flash"
        folder.mkdir()
        events = tmp_path / "events.jsonl"
        events.write_text(series_line(folder) + "\n")

        assert main(["replay", str(events), "--no-progress"]) == 0
        assert folder.is_dir()

    def test_replay_apply(self, tmp_path, clean_env):
        library = tmp_path / "library"
        folder = library / "the flash"
        folder.mkdir(parents=True)
        events = tmp_path / "events.jsonl"
        events.write_text(series_line(folder) + "\n")

        assert main(["replay", str(events), "--apply", "--no-progress"]) == 0
        assert (library / "The Flash (2014) [tvdb-279121]").is_dir()
        assert not folder.exists()

    def test_replay_with_config_file(self, tmp_path, clean_env):
        library = tmp_path / "library"
        folder = library / "the flash"
        folder.mkdir(parents=True)
        events = tmp_path / "events.jsonl"
        events.write_text(series_line(folder) + "\n")
        config = tmp_path / "rename.json"
        config.write_text(json.dumps({"DryRun": False, "AllowedLibraryNames": ["Anime"]}))

        assert main(["replay", str(events), "--config", str(config), "--no-progress"]) == 0
        assert folder.is_dir()

    def test_replay_bad_config(self, tmp_path, clean_env):
        config = tmp_path / "rename.json"
        config.write_text(json.dumps({"Bogus": 1}))
        assert main(["replay", str(tmp_path / "events.jsonl"), "--config", str(config)]) == 2

    def test_replay_missing_events_file(self, tmp_path, clean_env):
        assert main(["replay", str(tmp_path / "missing.jsonl")]) == 2

    def test_replay_undecodable_events(self, tmp_path, clean_env):
        events = tmp_path / "events.jsonl"
        events.write_bytes(b"\xff\xfe{\"item\": {}}\n")
        assert main(["replay", str(events), "--no-progress"]) == 2

    def test_replay_negative_debounce(self, tmp_path, clean_env):
        assert main(["replay", str(tmp_path / "events.jsonl"), "--debounce", "-1"]) == 2
