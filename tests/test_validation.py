"""Tests for audioex.validation module."""

import shutil
from pathlib import Path

import pytest

from audioex.config import AudioexConfig
from audioex.exceptions import (
    DependencyError,
    InputNotFoundError,
    InvalidStreamSelectorError,
    StreamOutOfRangeError,
)
from audioex.validation import (
    ContainerClass,
    check_ffmpeg,
    classify_container,
    parse_stream_selector,
    validate_input,
    validate_stream_selection,
)


class TestCheckFfmpeg:
    def test_reports_versions(self, media_tools):
        versions = check_ffmpeg()
        assert versions == {"ffmpeg_version": "6.1.1", "ffprobe_version": "6.1.1"}

    def test_missing_ffmpeg(self, monkeypatch):
        monkeypatch.setattr(shutil, "which", lambda name: None)
        with pytest.raises(DependencyError) as exc_info:
            check_ffmpeg()
        assert exc_info.value.dependency == "ffmpeg"
        assert "apt install ffmpeg" in exc_info.value.install_hint

    def test_missing_ffprobe_only(self, media_tools, monkeypatch):
        monkeypatch.setattr(
            shutil, "which", lambda name: None if name == "ffprobe" else f"/usr/bin/{name}"
        )
        with pytest.raises(DependencyError) as exc_info:
            check_ffmpeg()
        assert exc_info.value.dependency == "ffprobe"


class TestClassifyContainer:
    def test_vob_is_dvd(self):
        assert classify_container(Path("VTS_01_1.VOB")) is ContainerClass.DVD

    def test_m2ts_is_bluray(self):
        assert classify_container(Path("00001.m2ts")) is ContainerClass.BLURAY

    def test_unknown_defaults_to_bluray(self):
        assert classify_container(Path("movie.mkv")) is ContainerClass.BLURAY

    def test_custom_dvd_extensions(self):
        config = AudioexConfig(dvd_extensions=["vob", ".MPG"])
        assert classify_container(Path("title.mpg"), config) is ContainerClass.DVD


class TestValidateInput:
    def test_nonexistent_file(self):
        with pytest.raises(InputNotFoundError):
            validate_input(Path("/nonexistent/movie.m2ts"))

    def test_directory_not_file(self, tmp_path):
        with pytest.raises(InputNotFoundError):
            validate_input(tmp_path)

    def test_supported_file(self, m2ts_file):
        result = validate_input(m2ts_file)
        assert result["warnings"] == []
        assert result["container"] is ContainerClass.BLURAY

    def test_uppercase_vob(self, vob_file):
        result = validate_input(vob_file)
        assert result["warnings"] == []
        assert result["container"] is ContainerClass.DVD

    def test_other_extension_warns(self, tmp_path):
        source = tmp_path / "movie.ts"
        source.write_bytes(b"\x47")
        result = validate_input(source)
        assert len(result["warnings"]) == 1
        assert ".m2ts" in result["warnings"][0]


class TestParseStreamSelector:
    def test_zero(self):
        assert parse_stream_selector("0") == 0

    def test_positive(self):
        assert parse_stream_selector("12") == 12

    @pytest.mark.parametrize("value", ["-1", "abc", "1.5", "", " ", "+2"])
    def test_invalid(self, value):
        with pytest.raises(InvalidStreamSelectorError):
            parse_stream_selector(value)


class TestValidateStreamSelection:
    def test_in_range(self):
        assert validate_stream_selection(2, 3) == 2

    def test_out_of_range_names_valid_range(self):
        with pytest.raises(StreamOutOfRangeError, match="0-2"):
            validate_stream_selection(3, 3)

    def test_default_ordinal_is_exempt(self):
        assert validate_stream_selection(0, 1, specified=False) == 0
