"""
Command line entry point: replay recorded notifications or preview templates.

    metarenamer replay events.jsonl [--config rename.json] [--apply] [--debug]
    metarenamer render "{Name} ({Year}) [{Provider}-{Id}]" --name "The Flash" --year 2014 \
        --provider tvdb --id 279121
"""

import argparse
import json
import sys
from typing import Iterator, TextIO

import metarenamer as metarenamer_module
from metarenamer.models import ItemChangedNotification
from metarenamer.rename import RenameCoordinator, render_name, replay_events
from metarenamer.utils import LogLevel, logger
from metarenamer.utils.config import ConfigError, load_config


def iter_notifications(stream: TextIO) -> Iterator[ItemChangedNotification | ValueError]:
    """Yield one notification per non-blank JSON line; unparsable lines yield the ValueError."""
    for line_no, line in enumerate(stream, start=1):
        line = line.strip()
        if not line:
            continue
        try:
            yield ItemChangedNotification.from_dict(json.loads(line))
        except ValueError as e:
            # json.JSONDecodeError is a ValueError too
            yield ValueError(f"line {line_no}: {e}")


def _replay(args) -> int:
    try:
        config = load_config(args.config)
    except ConfigError as e:
        logger.log("cli.error", LogLevel.ERROR, msg=str(e))
        return 2

    if args.apply:
        config = config.replace(dry_run=False)
    elif args.dry_run:
        config = config.replace(dry_run=True)

    if args.debounce < 0:
        logger.log("cli.error", LogLevel.ERROR, msg="--debounce must be >= 0")
        return 2

    coordinator = RenameCoordinator(global_min_interval=args.debounce)
    logger.log("cli.start", LogLevel.INFO, events=args.events, dry_run=config.dry_run, debounce=args.debounce)

    try:
        if args.events == "-":
            totals = replay_events(coordinator, iter_notifications(sys.stdin), config, progress=False)
        else:
            with open(args.events, "r", encoding="utf-8") as fh:
                totals = replay_events(coordinator, iter_notifications(fh), config, progress=not args.no_progress)
    except OSError as e:
        logger.log("cli.error", LogLevel.ERROR, msg="cannot read events", path=args.events, error=str(e))
        return 2
    except UnicodeDecodeError as e:
        logger.log("cli.error", LogLevel.ERROR, msg="events are not valid UTF-8", path=args.events, error=str(e))
        return 2
    finally:
        coordinator.clear_state()

    logger.log("cli.end", LogLevel.INFO, **{k.lower(): v for k, v in totals.items()})
    return 0


def _render(args) -> int:
    logger.safe_print(
        render_name(
            args.template,
            name=args.name,
            year=args.year,
            provider=args.provider.lower() if args.provider else None,
            provider_id=args.id,
            season=args.season,
            season_name=args.season_name,
            episode=args.episode,
            title=args.title,
        )
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="metarenamer",
        description="Rename media library folders and episode files to match their metadata.",
        epilog="Example: metarenamer replay events.jsonl --config rename.json",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {metarenamer_module.__version__}")
    sub = parser.add_subparsers(dest="command", required=True)

    replay = sub.add_parser("replay", help="Replay item change notifications from a JSON-lines file")
    replay.add_argument("events", help="JSON-lines file with one notification per line, or - for stdin")
    replay.add_argument("--config", help="JSON configuration file (overrides METARENAMER_* environment variables)")
    mode = replay.add_mutually_exclusive_group()
    mode.add_argument("--apply", action="store_true", help="Perform renames (turns dry run off)")
    mode.add_argument("--dry-run", action="store_true", help="Only report what would be renamed")
    replay.add_argument(
        "--debounce", type=float, default=0.0,
        help="Minimum seconds between processed events (default: 0 for replays)",
    )
    replay.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    replay.set_defaults(func=_replay)

    render = sub.add_parser("render", help="Preview a naming template")
    render.add_argument("template", help='Template, e.g. "{Name} ({Year}) [{Provider}-{Id}]"')
    render.add_argument("--name")
    render.add_argument("--year", type=int)
    render.add_argument("--provider")
    render.add_argument("--id")
    render.add_argument("--season", type=int)
    render.add_argument("--season-name")
    render.add_argument("--episode", type=int)
    render.add_argument("--title")
    render.set_defaults(func=_render)

    args = parser.parse_args(argv)

    metarenamer_module.DEBUG = args.debug
    logger.set_log_level(LogLevel.DEBUG if args.debug else LogLevel.INFO)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
