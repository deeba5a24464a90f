"""Entry-point for launching the CLI application."""
from __future__ import annotations

import logging

from .presentation.cli.app import main as cli_main
from .presentation.cli.config import load_config
from .presentation.cli.render import debug_enabled

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level_name: str) -> None:
    """Route log records to stderr; POKECATCH_DEBUG=1 forces DEBUG."""
    level = logging.DEBUG if debug_enabled() else getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main() -> None:
    """Run the CLI presentation layer."""
    config = load_config()
    configure_logging(config["log_level"])
    cli_main(config)


if __name__ == "__main__":
    main()
