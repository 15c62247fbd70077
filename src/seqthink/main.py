"""
seqthink entry point.

This file handles startup concerns (arg-parsing, env setup, logging) and launches the appropriate
interface (API, or API plus interactive CLI).
"""

import argparse
import logging
import sys

from seqthink.api.app import (
    build_app,
    run_api,
)
from seqthink.config import settings
from seqthink.tools import ToolCatalogError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _init_logging(level: str) -> None:
    numeric = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main(argv: list[str] | None = None) -> None:
    """
    Main entry point for the seqthink application.

    Sets up the command-line interface, initializes logging, and starts the API server, either
    alone or alongside the interactive CLI client.  Exits with status 1 if the server cannot
    be started.
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = argparse.ArgumentParser(description="Run the seqthink sequential thinking server")
    parser.add_argument(
        "--mode",
        choices=["api", "cli"],
        type=str.lower,
        default="api",
        help="Launch the REST API only, or the API with an interactive CLI (default: api)",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        type=str.lower,
        default=settings.LOG_LEVEL,
        help="Logging level (default from env: %(default)s)",
    )
    parser.add_argument(
        "--max-history-size",
        type=_positive_int,
        default=settings.MAX_HISTORY_SIZE,
        help="Number of thoughts to retain (default from env: %(default)s)",
    )
    args = parser.parse_args(argv)

    # Override settings with command-line arguments
    settings.LOG_LEVEL = args.log_level
    settings.MAX_HISTORY_SIZE = args.max_history_size

    _init_logging(settings.LOG_LEVEL)

    logger.info("Starting seqthink [%s mode]", args.mode)
    logger.debug("Settings: %s", settings.model_dump())

    try:
        if args.mode == "api":
            run_api(host=settings.API_HOST, port=settings.API_PORT, reload=settings.DEBUG)
            return

        # Lazy import to avoid client dependencies if not needed
        import threading  # pylint: disable=import-outside-toplevel

        from seqthink.client.cli import (  # pylint: disable=import-outside-toplevel
            run_cli,
        )

        # Built here so a bad tool catalog stops startup before the thread runs
        app = build_app()

        # Start API server in a separate thread
        api_thread = threading.Thread(
            target=run_api,
            kwargs={
                "host": settings.API_HOST,
                "port": settings.API_PORT,
                "reload": False,  # Reload doesn't work well with threading
                "log_level": "warning",
                "app": app,
            },
            daemon=True,
        )
        api_thread.start()

        # Run CLI in main thread
        run_cli()
    except ToolCatalogError as exc:
        logger.error("Fatal error starting server: %s", exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
