import argparse
import logging
import sys
from typing import Optional, Sequence

from app_config import AppConfigurationError, load_app_config
from notify import NotifyLoop, create_notifier
from pomodoro import PomodoroTimer, StorageUnavailableError
from runtime import ACTIONS, ActionDependencies, ActionDispatcher
from runtime.actions import ACTION_NOTIFY, ACTION_USAGE, LONG_RUNNING_ACTIONS

DESCRIPTION = "pomo - a simple Pomodoro timer."

EPILOG = """\
actions:
  start    Start the Pomodoro timer.
  stop     Stop the Pomodoro timer.
  pause    Pause a running timer or restart a paused one.
  clock    Print the time left in the current period. A prefix of W marks a
           work period, B a break period, and a leading P a paused timer.
  status   Print the clock once a second, forever.
  notify   Raise a notification at the end of every work and break period,
           forever. Best run in the background.
  usage    Print this usage message.

environment variables:
  POMO_CONFIG        Config file (default: $XDG_CONFIG_HOME/pomo.toml).
  POMO_FILE          Timer record file (default: $XDG_DATA_HOME/pomo). Use
                     different files to run several timers.
  POMO_WORK_TIME     Work period in minutes (default: 25).
  POMO_BREAK_TIME    Break period in minutes (default: 5).
  POMO_NOTIFIER      desktop, console, command, or chime (default: desktop).
  POMO_MSG_CALLBACK  Command run at the end of a period with 0 (work) or 1
                     (break) and the message appended.
"""


def setup_logging(level: int = logging.WARNING) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )
    return logging.getLogger("pomo")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pomo",
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="FILE",
        help="config file with timer and notification settings",
    )
    parser.add_argument(
        "--log-level",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="log verbosity (default: INFO for notify, WARNING otherwise)",
    )
    parser.add_argument("action", nargs="?", metavar="ACTION", help=" | ".join(ACTIONS))
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one pomo action."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.action not in ACTIONS:
        if args.action:
            print(f"Unknown action: {args.action}.", file=sys.stderr)
        else:
            print("Action not supplied.", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 2

    if args.log_level:
        level = getattr(logging, args.log_level)
    elif args.action in LONG_RUNNING_ACTIONS:
        level = logging.INFO
    else:
        level = logging.WARNING
    logger = setup_logging(level=level)

    if args.action == ACTION_USAGE:
        parser.print_help()
        return 0

    try:
        app_config = load_app_config(args.config)
    except AppConfigurationError as error:
        logger.error(f"App configuration error: {error}")
        return 1
    if app_config.source_file:
        logger.debug("Loaded config: %s", app_config.source_file)

    timer = PomodoroTimer.from_settings(
        app_config.timer,
        logger=logging.getLogger("pomodoro"),
    )

    def build_notify_loop() -> NotifyLoop:
        notify_logger = logging.getLogger("notify")
        return NotifyLoop(
            timer,
            create_notifier(app_config.notify, logger=notify_logger),
            poll_interval_seconds=app_config.notify.poll_interval_seconds,
            logger=notify_logger,
        )

    dispatcher = ActionDispatcher(
        ActionDependencies(
            timer=timer,
            build_notify_loop=build_notify_loop,
            write=lambda line: print(line, flush=True),
            print_usage=parser.print_help,
            logger=logger,
        )
    )

    try:
        return dispatcher.dispatch(args.action)
    except StorageUnavailableError as error:
        logger.error(f"Timer record error: {error}")
        return 1
    except ModuleNotFoundError as error:
        if args.action != ACTION_NOTIFY:
            raise
        logger.error(f"Notifier dependency missing: {error}")
        return 1
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
