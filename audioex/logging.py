"""
audioex.logging - Logging setup for the audioex package.

Terminal output for users goes through the rich console. The ``audioex``
logger carries the debug trail shown with ``--verbose``: every ffprobe and
ffmpeg command line, the ffmpeg stderr of a failed stream copy, and probe
failures that are reported as placeholders rather than errors.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("audioex")


def configure_logging(verbose: bool = False) -> None:
    """Set the audioex log level (DEBUG with --verbose, else WARNING)."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    logger.setLevel(level)
