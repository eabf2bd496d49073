#!/usr/bin/env python3
"""
Terminal football scoreboard.

Polls the ESPN scoreboard in the background and redraws a full-screen
view of the slate: the game list on the left, the selected game's header,
field strip, status bar and last play on the right.

Keys: q quit, j/Down next game, k/Up previous game, f live-only filter,
l show/hide logos.
"""
import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.live import Live

import config
from app_state import AppState, handle_command
from screens.scoreboard import compose_screen
from services.poller import start_poller
from services.terminal import TerminalSession
from updates import UpdateChannel, drain_into


# ─── Logging ─────────────────────────────────────────────────────────────────
def configure_logging(log_file: Optional[str], level: int = logging.INFO) -> None:
    """Send log records to *log_file* so they never land on the live screen."""
    handlers = [logging.FileHandler(log_file, encoding="utf-8")] if log_file else [logging.NullHandler()]
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )
    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Live football scoreboard for the terminal.")
    parser.add_argument(
        "-i",
        "--interval",
        type=float,
        default=config.POLL_INTERVAL_SECONDS,
        help="Seconds between scoreboard fetches (default: %(default)s).",
    )
    parser.add_argument(
        "--ncaa",
        action="store_true",
        help="Show college football instead of the NFL.",
    )
    parser.add_argument(
        "--log-file",
        default=config.LOG_FILE,
        help="Where to write log output (default: %(default)s).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log at DEBUG level.",
    )
    return parser


# ─── Render loop ─────────────────────────────────────────────────────────────
def tick(state: AppState, channel: UpdateChannel, session: TerminalSession) -> None:
    """One pass of the render loop: one key, then every pending update."""
    command = session.read_command(config.INPUT_POLL_SECONDS)
    if command is not None:
        handle_command(state, command)
    drain_into(state, channel)


def run(league: str, interval: float, console: Optional[Console] = None) -> int:
    console = console or Console()
    state = AppState()
    channel = UpdateChannel(config.CHANNEL_CAPACITY)
    poller = start_poller(channel, league, interval)

    logging.info("🏈 Scoreboard started for %s", league)
    try:
        with TerminalSession() as session, Live(
            compose_screen(state),
            console=console,
            screen=True,
            auto_refresh=False,
            redirect_stdout=False,
            redirect_stderr=False,
        ) as live:
            while not state.should_quit:
                tick(state, channel, session)
                live.update(compose_screen(state), refresh=True)
    finally:
        poller.stop()
        logging.info("👋 Scoreboard stopped")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    configure_logging(args.log_file, logging.DEBUG if args.debug else logging.INFO)

    league = config.NCAA_LEAGUE if args.ncaa else config.DEFAULT_LEAGUE
    interval = args.interval if args.interval > 0 else config.POLL_INTERVAL_SECONDS
    try:
        return run(league, interval)
    except KeyboardInterrupt:
        logging.info("✋ CTRL-C caught, exiting…")
        return 0


if __name__ == "__main__":
    sys.exit(main())
