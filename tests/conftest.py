"""
Test configuration and shared fixtures.

FakeMediaTools stands in for subprocess.run so ffprobe/ffmpeg invocations
can be answered with canned JSON and exit codes.
"""

from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path
from typing import Any

import pytest


class FakeMediaTools:
    """Callable replacement for subprocess.run serving ffprobe/ffmpeg."""

    def __init__(self, streams: list[dict[str, Any]]) -> None:
        self.streams = streams
        self.calls: list[list[str]] = []
        self.probe_returncode = 0
        self.copy_returncode = 0
        self.encode_returncode = 0
        self.detail_failures: set[int] = set()
        self.output_probe_fails = False
        self.written_codec: str | None = None
        self.ffmpeg_stdin: list[Any] = []

    def __call__(self, cmd, capture_output=False, text=False, timeout=None, **kwargs):
        cmd = [str(c) for c in cmd]
        self.calls.append(cmd)
        tool = Path(cmd[0]).name
        if tool == "ffprobe":
            return self._ffprobe(cmd)
        if tool == "ffmpeg":
            if "-version" not in cmd:
                self.ffmpeg_stdin.append(kwargs.get("stdin"))
            return self._ffmpeg(cmd)
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    @property
    def audio_streams(self) -> list[dict[str, Any]]:
        unique: dict[int, dict[str, Any]] = {}
        for stream in self.streams:
            unique.setdefault(int(stream["index"]), stream)
        return [unique[i] for i in sorted(unique)]

    @property
    def extraction_calls(self) -> list[list[str]]:
        return [c for c in self.calls if Path(c[0]).name == "ffmpeg" and "-version" not in c]

    def _done(self, cmd, returncode=0, stdout="", stderr=""):
        return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)

    def _ffprobe(self, cmd):
        if "-version" in cmd:
            return self._done(cmd, stdout="ffprobe version 6.1.1 Copyright (c) 2007-2023\n")

        if "-select_streams" not in cmd:
            if self.output_probe_fails:
                return self._done(cmd, 1, stderr="Invalid data found when processing input")
            target = Path(cmd[-1])
            data = {
                "streams": [
                    {
                        "codec_name": self.written_codec,
                        "channels": 2,
                        "sample_rate": "48000",
                        "bit_rate": "2304000",
                    }
                ],
                "format": {
                    "filename": str(target),
                    "size": str(target.stat().st_size),
                    "duration": "1425.500000",
                },
            }
            return self._done(cmd, stdout=json.dumps(data))

        if self.probe_returncode:
            return self._done(cmd, self.probe_returncode, stderr="Invalid data found")

        selector = cmd[cmd.index("-select_streams") + 1]
        if selector == "a":
            return self._done(cmd, stdout=json.dumps({"streams": self.streams}))

        ordinal = int(selector.split(":")[1])
        if ordinal in self.detail_failures:
            return self._done(cmd, 1, stderr="Stream specifier matches no streams")
        streams = self.audio_streams
        selected = [streams[ordinal]] if ordinal < len(streams) else []
        return self._done(cmd, stdout=json.dumps({"streams": selected}))

    def _ffmpeg(self, cmd):
        if "-version" in cmd:
            return self._done(cmd, stdout="ffmpeg version 6.1.1 Copyright (c) 2000-2023\n")

        codec = cmd[cmd.index("-c:a") + 1]
        returncode = self.copy_returncode if codec == "copy" else self.encode_returncode
        if returncode:
            return self._done(cmd, returncode, stderr=f"Could not write header ({codec})")

        ordinal = int(cmd[cmd.index("-map") + 1].split(":")[-1])
        if codec == "copy":
            codec = self.audio_streams[ordinal]["codec_name"]
        self.written_codec = codec
        Path(cmd[-1]).write_bytes(b"RIFF" + codec.encode() + b"WAVE")
        return self._done(cmd)


@pytest.fixture
def bluray_streams() -> list[dict[str, Any]]:
    """Three audio streams as ffprobe reports them for a typical BD .m2ts."""
    return [
        {
            "index": 1,
            "codec_name": "pcm_bluray",
            "sample_rate": "48000",
            "channels": 2,
            "channel_layout": "stereo",
            "bits_per_sample": 0,
            "bits_per_raw_sample": "24",
            "duration": "1425.500000",
            "bit_rate": "2304000",
        },
        {
            "index": 2,
            "codec_name": "pcm_bluray",
            "sample_rate": "48000",
            "channels": 6,
            "channel_layout": "5.1(side)",
            "bits_per_sample": 0,
            "bits_per_raw_sample": "24",
            "duration": "1425.500000",
            "bit_rate": "6912000",
        },
        {
            "index": 4,
            "codec_name": "dts",
            "sample_rate": "48000",
            "channels": 6,
            "channel_layout": "5.1(side)",
            "bits_per_sample": 0,
            "duration": "1425.500000",
            "bit_rate": "1509000",
        },
    ]


@pytest.fixture
def dvd_streams() -> list[dict[str, Any]]:
    """Two audio streams as ffprobe reports them for a DVD VOB."""
    return [
        {
            "index": 1,
            "codec_name": "ac3",
            "sample_rate": "48000",
            "channels": 2,
            "channel_layout": "stereo",
            "bits_per_sample": 0,
            "bit_rate": "192000",
        },
        {
            "index": 2,
            "codec_name": "pcm_dvd",
            "sample_rate": "48000",
            "channels": 2,
            "channel_layout": "stereo",
            "bits_per_sample": 16,
            "bits_per_raw_sample": "16",
            "bit_rate": "1536000",
        },
    ]


@pytest.fixture
def media_tools(monkeypatch: pytest.MonkeyPatch, bluray_streams) -> FakeMediaTools:
    """Fake ffmpeg/ffprobe on PATH, serving the Blu-ray streams by default."""
    tools = FakeMediaTools(bluray_streams)
    monkeypatch.setattr(subprocess, "run", tools)
    monkeypatch.setattr(shutil, "which", lambda name: f"/usr/bin/{name}")
    return tools


@pytest.fixture
def m2ts_file(tmp_path: Path) -> Path:
    path = tmp_path / "movie.m2ts"
    path.write_bytes(b"\x47" * 192)
    return path


@pytest.fixture
def vob_file(tmp_path: Path) -> Path:
    path = tmp_path / "VTS_01_1.VOB"
    path.write_bytes(b"\x00\x00\x01\xba" * 16)
    return path
