"""
audioex.utils - Shared utility functions.

Output naming and human-readable formatting used by the CLI and reports.
"""

from __future__ import annotations

from pathlib import Path

from audioex.config import AudioexConfig


def default_output_path(
    input_path: Path,
    ordinal: int = 0,
    config: AudioexConfig | None = None,
) -> Path:
    """Derive the output WAV path from the input container.

    Stream 0 maps to ``movie.wav``; any other stream gets the configured
    suffix, ``movie_2.wav`` by default.

    Args:
        input_path: Source container path
        ordinal: Selected stream ordinal
        config: Config holding output_suffix_template

    Returns:
        Path next to the input with a .wav extension
    """
    config = config or AudioexConfig()
    stem = input_path.stem
    if ordinal:
        stem += config.output_suffix_template.format(ordinal=ordinal)
    return input_path.with_name(f"{stem}.wav")


def format_size(path: Path) -> str:
    """Format file size in human-readable format."""
    if not path.exists():
        return "-"
    size = path.stat().st_size
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} TB"


def format_duration(seconds: float) -> str:
    """Format seconds as HH:MM:SS or MM:SS.

    Args:
        seconds: Duration in seconds

    Returns:
        Formatted string (HH:MM:SS if >= 1 hour, otherwise MM:SS)
    """
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
