"""Logging setup for the command-line entrypoints."""

import logging
import sys


def configure_logging(verbose: bool = False) -> None:
    """Send log records to stderr so stdout carries only the report."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )
