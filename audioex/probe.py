"""
audioex.probe - Audio stream enumeration with ffprobe.

Every query asks ffprobe for JSON limited to the entries we display. Native
stream indexes in a disc container are often sparse (video, subtitles and
menus share the numbering), so streams are also given a dense ordinal that
matches ffmpeg's ``0:a:N`` selector.
"""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from audioex.config import AudioexConfig
from audioex.exceptions import NoStreamsError, ProbeError
from audioex.logging import logger

SUMMARY_ENTRIES = (
    "index",
    "codec_name",
    "channels",
    "sample_rate",
    "bits_per_sample",
    "bits_per_raw_sample",
    "channel_layout",
)

DETAIL_ENTRIES = (
    "codec_name",
    "sample_rate",
    "channels",
    "channel_layout",
    "bits_per_sample",
    "bits_per_raw_sample",
    "duration",
    "bit_rate",
)

OUTPUT_FORMAT_ENTRIES = ("filename", "size", "duration")
OUTPUT_STREAM_ENTRIES = ("codec_name", "channels", "sample_rate", "bit_rate")

_MISSING = {"", "N/A", "unknown"}


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return None if text in _MISSING else text


def _to_int(value: Any) -> int | None:
    text = _clean(value)
    if text is None:
        return None
    try:
        return int(float(text))
    except ValueError:
        return None


def resolve_bit_depth(stream: dict[str, Any]) -> int | None:
    """Bit depth of a probed stream.

    PCM streams from disc containers usually report bits_per_sample as 0 and
    carry the real depth in bits_per_raw_sample.
    """
    bits = _to_int(stream.get("bits_per_sample"))
    if not bits:
        bits = _to_int(stream.get("bits_per_raw_sample"))
    return bits or None


@dataclass
class AudioStream:
    """One audio stream as reported by ffprobe."""

    ordinal: int
    index: int | None
    codec_name: str | None = None
    channels: int | None = None
    sample_rate: int | None = None
    bits_per_sample: int | None = None
    channel_layout: str | None = None
    duration: str | None = None
    bit_rate: str | None = None

    @classmethod
    def from_probe(cls, ordinal: int, stream: dict[str, Any]) -> AudioStream:
        return cls(
            ordinal=ordinal,
            index=_to_int(stream.get("index")),
            codec_name=_clean(stream.get("codec_name")),
            channels=_to_int(stream.get("channels")),
            sample_rate=_to_int(stream.get("sample_rate")),
            bits_per_sample=resolve_bit_depth(stream),
            channel_layout=_clean(stream.get("channel_layout")),
            duration=_clean(stream.get("duration")),
            bit_rate=_clean(stream.get("bit_rate")),
        )

    def detail_fields(self) -> dict[str, Any]:
        """Fields shown in the detailed report, empty values dropped.

        codec_name, channels and sample_rate are always listed.
        """
        fields: dict[str, Any] = {
            "codec_name": self.codec_name or "",
            "channels": self.channels if self.channels is not None else "",
            "sample_rate": self.sample_rate if self.sample_rate is not None else "",
        }
        optional = {
            "bits_per_sample": self.bits_per_sample,
            "channel_layout": self.channel_layout,
            "duration": self.duration,
            "bit_rate": self.bit_rate,
        }
        fields.update({k: v for k, v in optional.items() if v})
        return fields


def run_ffprobe(
    path: Path,
    entries: str,
    select_streams: str | None = None,
    config: AudioexConfig | None = None,
) -> dict[str, Any]:
    """Run ffprobe with JSON output.

    Args:
        path: Media file to probe
        entries: Value for -show_entries (e.g. "stream=codec_name")
        select_streams: Optional -select_streams specifier (e.g. "a", "a:1")
        config: Config naming the ffprobe binary

    Returns:
        Parsed ffprobe JSON

    Raises:
        ProbeError: If ffprobe can't be run, fails, or prints invalid JSON
    """
    config = config or AudioexConfig()
    cmd = [config.ffprobe_path, "-v", "quiet"]
    if select_streams:
        cmd += ["-select_streams", select_streams]
    cmd += ["-show_entries", entries, "-print_format", "json", str(path)]

    logger.debug("Running: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        raise ProbeError(f"Could not run {config.ffprobe_path}: {e}") from e

    if result.returncode != 0:
        raise ProbeError(f"ffprobe failed for {path}: {result.stderr.strip()}")

    try:
        data = json.loads(result.stdout or "{}")
    except json.JSONDecodeError as e:
        raise ProbeError(f"ffprobe returned invalid JSON for {path}: {e}") from e

    if not isinstance(data, dict):
        raise ProbeError(f"ffprobe returned unexpected output for {path}")
    return data


def probe_audio_streams(path: Path, config: AudioexConfig | None = None) -> list[AudioStream]:
    """Enumerate audio streams in a container.

    Duplicate rows (some demuxers report a stream twice) are collapsed by
    native index, and the survivors are numbered 0..N-1.

    Raises:
        ProbeError: If ffprobe fails
        NoStreamsError: If the container has no audio streams
    """
    try:
        data = run_ffprobe(path, "stream=" + ",".join(SUMMARY_ENTRIES), "a", config)
    except ProbeError as e:
        raise ProbeError(f"Could not analyze audio streams in '{path}': {e}") from e

    by_index: dict[int, dict[str, Any]] = {}
    for stream in data.get("streams", []):
        index = _to_int(stream.get("index"))
        if index is None or index < 0:
            continue
        by_index.setdefault(index, stream)

    if not by_index:
        raise NoStreamsError(f"No audio streams found in '{path}'")

    return [
        AudioStream.from_probe(ordinal, by_index[index])
        for ordinal, index in enumerate(sorted(by_index))
    ]


def probe_stream_details(
    path: Path,
    ordinal: int,
    config: AudioexConfig | None = None,
) -> AudioStream | None:
    """Query the extended field set for a single stream.

    Returns:
        AudioStream with duration and bit_rate filled, or None if the
        query failed or came back empty
    """
    try:
        data = run_ffprobe(path, "stream=" + ",".join(DETAIL_ENTRIES), f"a:{ordinal}", config)
    except ProbeError as e:
        logger.debug("Detail probe for stream %d failed: %s", ordinal, e)
        return None

    streams = data.get("streams") or []
    if not streams:
        return None
    return AudioStream.from_probe(ordinal, streams[0])


def probe_stream_codec(path: Path, ordinal: int, config: AudioexConfig | None = None) -> str:
    """Codec name of the selected stream, or "unknown"."""
    try:
        data = run_ffprobe(path, "stream=codec_name", f"a:{ordinal}", config)
    except ProbeError as e:
        logger.debug("Codec probe for stream %d failed: %s", ordinal, e)
        return "unknown"

    streams = data.get("streams") or []
    codec = _clean(streams[0].get("codec_name")) if streams else None
    return codec or "unknown"


def probe_output(path: Path, config: AudioexConfig | None = None) -> dict[str, Any]:
    """Format and stream metadata of a freshly written output file.

    Returns:
        Flat dict: filename, size, duration from the format section followed
        by codec_name, channels, sample_rate, bit_rate of the first stream

    Raises:
        ProbeError: If ffprobe fails
    """
    entries = (
        "format=" + ",".join(OUTPUT_FORMAT_ENTRIES) + ":stream=" + ",".join(OUTPUT_STREAM_ENTRIES)
    )
    data = run_ffprobe(path, entries, None, config)

    info: dict[str, Any] = {}
    fmt = data.get("format", {})
    for key in OUTPUT_FORMAT_ENTRIES:
        if _clean(fmt.get(key)) is not None:
            info[key] = fmt[key]

    streams = data.get("streams") or []
    if streams:
        for key in OUTPUT_STREAM_ENTRIES:
            if _clean(streams[0].get(key)) is not None:
                info[key] = streams[0][key]
    return info
