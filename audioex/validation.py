"""
audioex.validation - Dependency checks and validation utilities.

Validates environment, input containers and stream selection before any
extraction work happens.
"""

from __future__ import annotations

import shutil
import subprocess
from enum import Enum
from pathlib import Path
from typing import Any

from audioex.config import AudioexConfig
from audioex.exceptions import (
    DependencyError,
    InputNotFoundError,
    InvalidStreamSelectorError,
    StreamOutOfRangeError,
)
from audioex.logging import logger

INSTALL_HINT = (
    "Install with: brew install ffmpeg (macOS), sudo apt install ffmpeg (Ubuntu/Debian) "
    "or sudo yum install ffmpeg (CentOS/RHEL)"
)


class ContainerClass(str, Enum):
    """Disc source a container comes from, which decides the PCM fallback."""

    DVD = "dvd"
    BLURAY = "bluray"


def _tool_version(tool_path: str) -> str:
    try:
        proc = subprocess.run(
            [tool_path, "-version"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        version_line = proc.stdout.split("\n")[0]
        return version_line.split()[2] if version_line else "unknown"
    except (subprocess.TimeoutExpired, OSError, IndexError):
        return "unknown"


def check_ffmpeg(config: AudioexConfig | None = None) -> dict[str, str]:
    """Check if FFmpeg and FFprobe are installed and get versions.

    Args:
        config: Config naming the binaries (defaults to ffmpeg/ffprobe on PATH)

    Returns:
        Dict with 'ffmpeg_version' and 'ffprobe_version'

    Raises:
        DependencyError: If FFmpeg or FFprobe not found
    """
    config = config or AudioexConfig()
    result = {}

    for name, tool in (("ffmpeg", config.ffmpeg_path), ("ffprobe", config.ffprobe_path)):
        tool_path = shutil.which(tool)
        if not tool_path:
            raise DependencyError(name, f"{tool} not found in PATH", INSTALL_HINT)
        result[f"{name}_version"] = _tool_version(tool_path)
        logger.debug("%s %s at %s", name, result[f"{name}_version"], tool_path)

    return result


def file_extension(path: Path) -> str:
    """Lower-cased extension without the leading dot."""
    return path.suffix.lower().lstrip(".")


def classify_container(path: Path, config: AudioexConfig | None = None) -> ContainerClass:
    """Pick the container class from the file extension alone."""
    config = config or AudioexConfig()
    if file_extension(path) in config.dvd_extensions:
        return ContainerClass.DVD
    return ContainerClass.BLURAY


def validate_input(path: Path, config: AudioexConfig | None = None) -> dict[str, Any]:
    """Validate an input container exists and check its extension.

    An unexpected extension is only reported as a warning; ffprobe gets the
    final say on whether the file is usable.

    Args:
        path: Path to the .m2ts / .VOB container
        config: Config listing supported extensions

    Returns:
        Dict with 'path', 'container' and 'warnings'

    Raises:
        InputNotFoundError: If the file doesn't exist or is not a file
    """
    config = config or AudioexConfig()

    if not path.is_file():
        raise InputNotFoundError(f"Input file does not exist: '{path}'")

    warnings = []
    if file_extension(path) not in config.supported_extensions:
        supported = ", ".join(f".{ext}" for ext in config.supported_extensions)
        warnings.append(f"Input file extension is not one of {supported}")

    return {
        "path": str(path),
        "container": classify_container(path, config),
        "warnings": warnings,
    }


def parse_stream_selector(value: str) -> int:
    """Parse a -s value into a stream ordinal.

    Raises:
        InvalidStreamSelectorError: If value is not a non-negative integer
    """
    text = value.strip()
    if not (text.isascii() and text.isdigit()):
        raise InvalidStreamSelectorError(value)
    return int(text)


def validate_stream_selection(ordinal: int, stream_count: int, specified: bool = True) -> int:
    """Check an explicitly requested ordinal against the probed stream count.

    The default ordinal (not specified by the user) is accepted as-is since
    probing already guarantees at least one stream.

    Raises:
        StreamOutOfRangeError: If ordinal >= stream_count
    """
    if specified and not 0 <= ordinal < stream_count:
        raise StreamOutOfRangeError(ordinal, stream_count)
    return ordinal
