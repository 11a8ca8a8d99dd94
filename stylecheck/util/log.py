"""Logging setup shared by the command line entry points."""

import logging
import sys


def configure_logging(verbose: bool = False) -> None:
    """Route log records to stderr so they never mix with report lines."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )
