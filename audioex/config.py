"""
audioex.config - YAML config loading and validation.

Everything here has a built-in default, so a config file is optional. When
given (``--config`` or ``AUDIOEX_CONFIG``), it overrides tool paths, the
container classification and the PCM fallback presets.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from audioex.exceptions import ConfigError


class PcmPreset(BaseModel):
    """Re-encode target used when a stream copy fails."""

    codec: str
    sample_rate: int | None = Field(default=None, gt=0)

    @field_validator("codec")
    @classmethod
    def validate_codec(cls, v: str) -> str:
        if not v.startswith("pcm_"):
            raise ValueError("fallback codec must be a PCM codec (pcm_*)")
        return v

    @property
    def bit_depth(self) -> int | None:
        digits = "".join(c for c in self.codec if c.isdigit())
        return int(digits) if digits else None

    def codec_args(self) -> list[str]:
        """ffmpeg arguments selecting this preset."""
        args = ["-c:a", self.codec]
        if self.sample_rate:
            args += ["-ar", str(self.sample_rate)]
        return args


class AudioexConfig(BaseModel):
    """Resolved configuration for an audioex run."""

    ffmpeg_path: str = Field(default="ffmpeg", min_length=1)
    ffprobe_path: str = Field(default="ffprobe", min_length=1)

    supported_extensions: list[str] = Field(default_factory=lambda: ["m2ts", "vob"])
    dvd_extensions: list[str] = Field(default_factory=lambda: ["vob"])

    dvd_fallback: PcmPreset = Field(
        default_factory=lambda: PcmPreset(codec="pcm_s16le", sample_rate=48000)
    )
    bluray_fallback: PcmPreset = Field(default_factory=lambda: PcmPreset(codec="pcm_s24le"))

    output_suffix_template: str = "_{ordinal}"
    strict_stream_selector: bool = False

    @field_validator("supported_extensions", "dvd_extensions")
    @classmethod
    def normalize_extensions(cls, v: list[str]) -> list[str]:
        return [ext.lower().lstrip(".") for ext in v if ext.strip(". ")]

    @field_validator("output_suffix_template")
    @classmethod
    def validate_suffix_template(cls, v: str) -> str:
        if "{ordinal}" not in v:
            raise ValueError("output_suffix_template must contain '{ordinal}'")
        try:
            v.format(ordinal=1)
        except (KeyError, IndexError, ValueError, AttributeError, TypeError) as e:
            raise ValueError(
                f"output_suffix_template may only use the {{ordinal}} placeholder: {e!r}"
            ) from e
        return v


def load_config(path: Path | None = None) -> AudioexConfig:
    """Load and validate configuration, falling back to defaults.

    Args:
        path: Optional YAML config file

    Returns:
        Validated AudioexConfig

    Raises:
        ConfigError: If the file is missing, unreadable or invalid
    """
    if path is None:
        return AudioexConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            raw_config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Config {path} must be a mapping")

    try:
        return AudioexConfig(**raw_config)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e


def write_config(config: AudioexConfig, path: Path) -> None:
    """Write configuration to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data: dict[str, Any] = config.model_dump()
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
