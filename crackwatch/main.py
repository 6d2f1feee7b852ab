"""Main entry point for the crackwatch search client.

This module provides the command-line entry point with:
- Command-line argument parsing
- Logging and configuration setup
- Graceful shutdown handling
"""

import argparse
import asyncio
import signal
import sys
from pathlib import Path

import structlog

from crackwatch import __version__
from crackwatch.models import ClientConfig
from crackwatch.services.commands import SearchCommand, parse_command
from crackwatch.services.config import ConfigurationService
from crackwatch.services.errors import AppError, get_error_service
from crackwatch.services.formatter import NO_RESULTS_MESSAGE, format_results
from crackwatch.services.logging import setup_logging
from crackwatch.services.search import CrackwatchSearchService


log = structlog.stdlib.get_logger()


class ParsedArgs:
    """Type-safe container for parsed command-line arguments."""

    def __init__(
        self,
        words: list[str],
        page: int,
        command: bool,
        config: Path | None,
        log_level: str | None,
        log_dir: Path | None,
    ) -> None:
        self.words: list[str] = words
        self.page: int = page
        self.command: bool = command
        self.config: Path | None = config
        self.log_level: str | None = log_level
        self.log_dir: Path | None = log_dir


def parse_arguments(argv: list[str] | None = None) -> ParsedArgs:
    """Parse command-line arguments.

    Returns:
        Parsed arguments container
    """
    parser = argparse.ArgumentParser(
        prog="crackwatch-search",
        description="Search crackwatch.com for the crack status of games",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  crackwatch-search doom                       First page of games matching "doom"
  crackwatch-search --page 2 assassins creed   Second page
  crackwatch-search --command '!crack2 doom'   Parse a chat-style command
        """
    )

    _ = parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    _ = parser.add_argument(
        "words",
        nargs="+",
        help="Search term (or the whole chat command with --command)"
    )

    _ = parser.add_argument(
        "--page",
        type=int,
        default=1,
        help="1-based results page (default: 1)"
    )

    _ = parser.add_argument(
        "--command",
        action="store_true",
        help="Treat the arguments as a chat command such as '!crack2 doom'"
    )

    _ = parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to configuration file (default: ~/.config/crackwatch-search/config.json)"
    )

    _ = parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Set the logging level (default: from configuration, INFO)"
    )

    _ = parser.add_argument(
        "--log-dir",
        type=Path,
        default=None,
        help="Directory for log files (default: console only)"
    )

    ns = parser.parse_args(argv)

    return ParsedArgs(
        words=list(ns.words),
        page=int(ns.page),
        command=bool(ns.command),
        config=ns.config,
        log_level=ns.log_level,
        log_dir=ns.log_dir,
    )


def build_command(args: ParsedArgs, config: ClientConfig) -> SearchCommand | None:
    """Turn the parsed arguments into a search command."""
    text = " ".join(args.words)
    if args.command:
        return parse_command(text, prefix=config.command_prefix)
    return SearchCommand(term=text, page=args.page)


def setup_signal_handlers() -> None:
    """Route SIGINT and SIGTERM through KeyboardInterrupt so both take the same shutdown path."""
    def signal_handler(signum: int, frame: object) -> None:
        _ = frame
        log.info("Received signal", signal=signal.Signals(signum).name)
        raise KeyboardInterrupt

    _ = signal.signal(signal.SIGINT, signal_handler)
    _ = signal.signal(signal.SIGTERM, signal_handler)
    log.debug("Signal handlers registered")


async def run_search(command: SearchCommand, config: ClientConfig) -> list[str]:
    """Run one search and render it into printable blocks."""
    service = CrackwatchSearchService(config=config)
    results = await service.search(command.term, command.page)
    if not results.games:
        return [NO_RESULTS_MESSAGE]
    return format_results(
        results,
        command.page,
        max_length=config.max_message_length,
        page_size=config.page_size,
    )


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the application."""
    args = parse_arguments(argv)

    # Logging comes up before the config file is read so problems with it reach stderr
    _ = setup_logging(log_level=args.log_level or "INFO", log_dir=args.log_dir)

    config_service = ConfigurationService(config_path=args.config)
    config = config_service.load_config()

    if args.log_level is None and config.log_level != "INFO":
        _ = setup_logging(log_level=config.log_level, log_dir=args.log_dir)

    log.debug(
        "Starting crackwatch search",
        version=__version__,
        config_path=str(config_service.config_path),
    )

    setup_signal_handlers()

    try:
        command = build_command(args, config)
        if command is None:
            print(f"Usage: {config.command_prefix}[page] <search term>", file=sys.stderr)
            exit_code = 2
        else:
            for block in asyncio.run(run_search(command, config)):
                print(block)
            exit_code = 0

    except KeyboardInterrupt:
        log.info("Search interrupted by user")
        exit_code = 130  # Standard exit code for SIGINT

    except AppError as e:
        error = get_error_service().handle_error(e, operation="search", component="cli")
        print(f"A problem occurred: {get_error_service().create_user_message(error)}", file=sys.stderr)
        exit_code = 1

    except Exception as e:
        error = get_error_service().handle_error(e, operation="search", component="cli")
        log.error("Unhandled exception", error=str(e), exc_info=True)
        print(f"A problem occurred: {get_error_service().create_user_message(error)}", file=sys.stderr)
        exit_code = 1

    log.debug("Exiting", exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
