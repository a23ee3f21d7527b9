"""
audioex.reports - Terminal reports for probed streams and extraction results.

All coloring goes through Style so callers never hand-write rich markup
colors. Paths and probe values are escaped: disc rips are routinely named
like ``[BDMV] Title [Disc1]`` and would otherwise be parsed as markup.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from audioex.config import AudioexConfig
from audioex.probe import AudioStream, probe_stream_details
from audioex.utils import format_duration, format_size


class Style(str, Enum):
    """Semantic text styles mapped to rich styles."""

    ERROR = "red"
    WARNING = "yellow"
    SUCCESS = "green"
    DIM = "dim"


def styled(text: Any, style: Style | None = None) -> str:
    """Escape text and wrap it in markup for the given style."""
    body = escape(str(text))
    if style is None:
        return body
    return f"[{style.value}]{body}[/{style.value}]"


def _na(value: Any) -> str:
    return "N/A" if value in (None, "") else str(value)


def _seconds(value: Any) -> float | None:
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def format_stream_line(stream: AudioStream) -> str:
    """One-line summary of a stream."""
    return (
        f"Stream {stream.ordinal} (index {_na(stream.index)}): "
        f"{_na(stream.codec_name)}, {_na(stream.channels)}ch, {_na(stream.sample_rate)}Hz, "
        f"{_na(stream.bits_per_sample)}bit, {_na(stream.channel_layout)}"
    )


def print_stream_summary(console: Console, streams: list[AudioStream]) -> None:
    """Print the available streams followed by the total count."""
    console.print(styled("Available audio streams:", Style.SUCCESS))
    for stream in streams:
        console.print(f"  {styled(format_stream_line(stream))}")
    console.print()
    console.print(styled(f"Total audio streams: {len(streams)}", Style.SUCCESS))


def print_stream_details(
    console: Console,
    input_path: Path,
    stream_count: int,
    config: AudioexConfig | None = None,
) -> None:
    """Re-probe each stream for the extended field set and print key=value lines.

    A stream whose query fails gets a placeholder line; the report goes on.
    """
    console.print()
    console.print(styled("Detailed stream information:", Style.WARNING))

    for ordinal in range(stream_count):
        console.print()
        console.print(styled(f"--- Stream {ordinal} ---", Style.SUCCESS))
        details = probe_stream_details(input_path, ordinal, config)
        if details is None:
            console.print(f"  {styled(f'Unable to retrieve details for stream {ordinal}')}")
            continue
        for key, value in details.detail_fields().items():
            console.print(f"  {styled(f'{key}={value}')}")

    console.print()
    console.print(
        styled("Use -s <stream number> to extract a specific stream.", Style.SUCCESS)
    )


def print_output_info(console: Console, info: dict[str, Any]) -> None:
    """Print ffprobe metadata of the written file as key=value lines."""
    console.print(styled("Output file info:", Style.SUCCESS))
    for key, value in info.items():
        console.print(styled(f"{key}={value}"))


def print_completion(
    console: Console,
    output_path: Path,
    info: dict[str, Any] | None = None,
) -> None:
    """Print the final success summary."""
    console.print()
    console.print(styled("✓ Audio extraction completed successfully!", Style.SUCCESS))
    console.print(styled(f"✓ Output file: '{output_path}'", Style.SUCCESS))
    console.print(styled(f"✓ File size: {format_size(output_path)}", Style.SUCCESS))

    seconds = _seconds((info or {}).get("duration"))
    if seconds is not None:
        console.print(styled(f"✓ Duration: {format_duration(seconds)}", Style.SUCCESS))
