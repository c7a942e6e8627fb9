# =============================================================================
# guerrilla-tui Main Application
# =============================================================================
# Command-line entry point and the main loop.
#
# The application:
#   1. Loads configuration and applies command-line overrides
#   2. Opens a Guerrilla Mail session
#   3. Prints the addresses that reach the new inbox
#   4. Prints every message the poller delivers, in arrival order, until the
#      stream ends or the user presses Ctrl-C
# =============================================================================

import argparse
import asyncio
import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from guerrilla_tui import __version__, __app_name__
from guerrilla_tui.config import Config, ConfigError, print_paths
from guerrilla_tui.mail import GuerrillaClient, MailError, Poller
from guerrilla_tui.output import ConsolePrinter

if TYPE_CHECKING:
    from guerrilla_tui.output import Printer

logger = logging.getLogger(__name__)

# Sent by the service to every new inbox
WELCOME_SUBJECT = "Welcome to Guerrilla Mail"


def build_addresses(local_part: str, domains: Iterable[str]) -> list[str]:
    """Combine the session's local part with every shared domain."""
    return [f"{local_part}{domain}" for domain in domains]


async def stream_messages(
    printer: "Printer",
    poller: Poller,
    *,
    show_welcome: bool = False,
) -> int:
    """
    Print messages from ``poller`` until the stream ends.

    The welcome message is skipped when it is the first one delivered,
    unless ``show_welcome`` is set.

    Returns:
        Number of messages printed.
    """
    count = 0
    async for message in poller:
        if not show_welcome and count == 0 and message.subject == WELCOME_SUBJECT:
            logger.debug(f"Skipping welcome message {message.id}")
            continue
        printer.render_message(message)
        count += 1

    logger.info(f"Message stream ended after {count} messages")
    return count


# =============================================================================
# CLI Entry Point
# =============================================================================

def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog=__app_name__,
        description=(
            "Create a temporary email address and receive its email in the "
            "terminal. Powered by the Guerrilla Mail API."
        ),
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--paths",
        action="store_true",
        help="Print configuration paths and exit",
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to config file (default: XDG config location)",
    )

    parser.add_argument(
        "--init-config",
        action="store_true",
        help="Write the current settings to the config file and exit",
    )

    parser.add_argument(
        "-i",
        "--poll-interval",
        type=int,
        help="Poll interval in seconds. Must be between 1-600. Low values "
             "are not recommended due to API rate limits.",
    )

    parser.add_argument(
        "-w",
        "--show-welcome",
        action="store_true",
        default=None,
        help="Show the default Guerrilla Mail welcome email (filtered by default)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode (verbose logging)",
    )

    return parser.parse_args(argv)


def configure_logging(debug: bool) -> None:
    """Send log records to stderr, keeping stdout for panels."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def load_config(args: argparse.Namespace) -> Config:
    """
    Load the config file and apply command-line overrides.

    Raises:
        ConfigError: If the file or the resulting settings are invalid.
    """
    config = Config.load(args.config)

    if args.poll_interval is not None:
        config.general.poll_interval = args.poll_interval
    if args.show_welcome is not None:
        config.general.show_welcome = args.show_welcome

    config.validate()
    return config


def main(argv: list[str] | None = None) -> int:
    """
    Main entry point for guerrilla-tui.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = parse_args(argv)
    configure_logging(args.debug)

    # Handle --paths flag
    if args.paths:
        print_paths()
        return 0

    try:
        config = load_config(args)
    except ConfigError as e:
        print(e, file=sys.stderr)
        return 1

    if args.init_config:
        path = config.save(args.config)
        print(f"Wrote {path}")
        return 0

    client = GuerrillaClient(api_url=config.mail.api_url)
    try:
        client.connect()
    except MailError as e:
        print(e, file=sys.stderr)
        client.close()
        return 1

    printer = ConsolePrinter(
        sys.stdout,
        options=config.rendering.conversion_options(),
        time_format=config.rendering.time_format,
    )
    printer.render_summary(build_addresses(client.local_part, config.mail.domains))

    poller = Poller(client, interval=config.general.poll_interval)
    try:
        asyncio.run(stream_messages(
            printer,
            poller,
            show_welcome=config.general.show_welcome,
        ))
    except KeyboardInterrupt:
        pass
    finally:
        client.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
