"""
audioex.extract.audio - FFmpeg stream copy with PCM fallback.

Extracts one audio stream from a disc container:
- First try ``-c:a copy`` so the payload is written byte for byte
- If ffmpeg refuses (e.g. the WAV muxer has no tag for pcm_bluray or DTS),
  re-encode with the container class's PCM preset
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

from audioex.config import AudioexConfig, PcmPreset
from audioex.exceptions import ExtractionError
from audioex.logging import logger
from audioex.probe import probe_stream_codec
from audioex.validation import ContainerClass, classify_container


def build_ffmpeg_command(
    source_path: Path,
    output_path: Path,
    ordinal: int,
    codec_args: list[str],
    config: AudioexConfig | None = None,
) -> list[str]:
    """Build an ffmpeg command mapping audio stream ``ordinal`` to the output."""
    config = config or AudioexConfig()
    return [
        config.ffmpeg_path,
        "-i",
        str(source_path),
        "-map",
        f"0:a:{ordinal}",
        *codec_args,
        "-y",
        str(output_path),
    ]


def fallback_preset(container: ContainerClass, config: AudioexConfig | None = None) -> PcmPreset:
    """PCM preset used when a stream copy fails."""
    config = config or AudioexConfig()
    if container is ContainerClass.DVD:
        return config.dvd_fallback
    return config.bluray_fallback


def _run_ffmpeg(cmd: list[str]) -> subprocess.CompletedProcess[str] | None:
    logger.debug("Running: %s", " ".join(cmd))
    try:
        # ffmpeg reads interactive keys from stdin
        return subprocess.run(cmd, stdin=subprocess.DEVNULL, capture_output=True, text=True)
    except OSError as e:
        logger.debug("Could not launch %s: %s", cmd[0], e)
        return None


def extract_audio(
    source_path: Path,
    output_path: Path,
    ordinal: int = 0,
    config: AudioexConfig | None = None,
    console=None,
) -> dict[str, Any]:
    """Extract one audio stream from a container using FFmpeg.

    Args:
        source_path: Path to the .m2ts / .VOB container
        output_path: Output WAV path (overwritten if present)
        ordinal: Audio stream ordinal (ffmpeg's 0:a:N)
        config: Config with tool paths and fallback presets
        console: Optional rich console for output

    Returns:
        Dict with extraction results; 'method' is "copy" or the
        fallback codec name

    Raises:
        ExtractionError: If both the copy and the re-encode fail
    """
    from audioex.reports import Style, styled

    config = config or AudioexConfig()
    container = classify_container(source_path, config)
    preset = fallback_preset(container, config)

    result: dict[str, Any] = {
        "source": str(source_path),
        "output": str(output_path),
        "stream": ordinal,
        "container": container.value,
        "source_codec": None,
        "method": None,
        "success": False,
    }

    if console:
        console.print(
            styled(
                f"Extracting stream {ordinal} of '{source_path}' to '{output_path}'...",
                Style.SUCCESS,
            )
        )

    result["source_codec"] = probe_stream_codec(source_path, ordinal, config)

    if console:
        console.print(styled(f"Source codec: {result['source_codec']}", Style.WARNING))
        label = "DVD VOB" if container is ContainerClass.DVD else "Blu-ray M2TS"
        console.print(styled(f"Processing {label} file...", Style.WARNING))

    copy_cmd = build_ffmpeg_command(source_path, output_path, ordinal, ["-c:a", "copy"], config)
    proc = _run_ffmpeg(copy_cmd)

    if proc is not None and proc.returncode == 0:
        result["method"] = "copy"
        if console:
            console.print(styled("Audio extracted without re-encoding", Style.SUCCESS))
    else:
        if proc is not None:
            logger.debug("Stream copy failed: %s", proc.stderr.strip())
        if console:
            console.print(
                styled(
                    f"Direct copy failed. Converting to {_preset_label(preset)}...",
                    Style.WARNING,
                )
            )

        encode_cmd = build_ffmpeg_command(
            source_path, output_path, ordinal, preset.codec_args(), config
        )
        proc = _run_ffmpeg(encode_cmd)
        if proc is None or proc.returncode != 0:
            detail = proc.stderr.strip() if proc is not None else f"could not run {encode_cmd[0]}"
            raise ExtractionError(f"Failed to extract audio from stream {ordinal}: {detail}")

        result["method"] = preset.codec
        if console:
            console.print(
                styled(f"Audio extracted as {_preset_label(preset)}", Style.SUCCESS)
            )

    result["success"] = True
    if output_path.exists():
        result["output_size"] = output_path.stat().st_size

    return result


def _preset_label(preset: PcmPreset) -> str:
    label = f"{preset.bit_depth}-bit PCM" if preset.bit_depth else preset.codec
    if preset.sample_rate:
        label += f" at {preset.sample_rate}Hz"
    return label
