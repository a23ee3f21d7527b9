"""
audioex.cli - Typer CLI entry point.

audioex [-s N] [-i] [-y] [-h] input.m2ts|input.vob [output.wav]
"""

from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import click
import typer
from rich.console import Console
from typer.core import TyperCommand

from audioex import __version__
from audioex.config import load_config, write_config
from audioex.exceptions import (
    ConfigError,
    DependencyError,
    ExtractionError,
    InputNotFoundError,
    InvalidStreamSelectorError,
    ProbeError,
    StreamOutOfRangeError,
)
from audioex.logging import configure_logging, logger
from audioex.reports import (
    Style,
    print_completion,
    print_output_info,
    print_stream_details,
    print_stream_summary,
    styled,
)

app = typer.Typer(
    name="audioex",
    help="Extract audio from Blu-ray .m2ts and DVD .VOB files without re-encoding.",
    add_completion=False,
)
console = Console(highlight=False)

USAGE = """\
Usage: audioex [-s NUM] [-i] [-y] input.m2ts|input.vob [output.wav]

Extract audio from Blu-ray .m2ts and DVD .VOB files without re-encoding.

Options:
  -s NUM        Audio stream number to extract (starts at 0, default: 0)
  -i            Show stream information only (no extraction)
  -y            Overwrite an existing output file without asking
  -h            Show this help
  --config PATH YAML config file (or set AUDIOEX_CONFIG)
  --write-config PATH
                Write the active config to PATH and exit
  --verbose     Log ffmpeg/ffprobe commands
  --version     Show version and exit

Arguments:
  input.m2ts    Input .m2ts file (Blu-ray)
  input.vob     Input .VOB file (DVD)
  output.wav    Output audio file (optional, defaults to the input name with .wav)

Examples:
  audioex movie.m2ts
  audioex VTS_01_1.VOB
  audioex -s 1 movie.m2ts audio.wav
  audioex -i movie.m2ts                    # show stream info only
  audioex -y movie.m2ts output.wav         # overwrite without asking
  audioex -s 0 VTS_01_1.VOB japanese.wav"""


def show_usage() -> NoReturn:
    console.print(USAGE, markup=False, highlight=False)
    raise typer.Exit(1)


def fail(message: str, hint: str | None = None) -> NoReturn:
    """Print an error (and optional hint) and exit with status 1."""
    console.print(styled(f"Error: {message}", Style.ERROR))
    if hint:
        console.print(styled(hint, Style.DIM))
    raise typer.Exit(1)


def help_callback(value: bool) -> None:
    if value:
        show_usage()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"audioex {__version__}")
        raise typer.Exit()


def confirm_overwrite() -> bool:
    """Ask before replacing an existing file. Only a reply starting with y/Y agrees."""
    try:
        reply = console.input("Overwrite? (y/N): ")
    except EOFError:
        console.print()
        return False
    return reply.strip()[:1] in ("y", "Y")


class AudioexCommand(TyperCommand):
    """Command that answers any parse error with the full usage text and exit 1."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            console.print(styled(f"Error: {e.format_message()}", Style.ERROR))
            show_usage()


@app.command(cls=AudioexCommand, context_settings={"help_option_names": []})
def main(
    paths: list[str] = typer.Argument(
        None, metavar="INPUT [OUTPUT]", help="Input container and optional output WAV"
    ),
    stream: str | None = typer.Option(
        None, "-s", "--stream", help="Audio stream number (starts at 0, default: 0)"
    ),
    info_only: bool = typer.Option(False, "-i", "--info", help="Show stream information only"),
    force: bool = typer.Option(False, "-y", "--yes", help="Overwrite output without asking"),
    config_file: Path | None = typer.Option(
        None, "--config", envvar="AUDIOEX_CONFIG", help="YAML config file"
    ),
    write_config_file: Path | None = typer.Option(
        None, "--write-config", help="Write the active config to PATH and exit"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    show_help: bool = typer.Option(
        False,
        "-h",
        "--help",
        help="Show usage and exit",
        callback=help_callback,
        is_eager=True,
        expose_value=False,
    ),
) -> None:
    """Extract one audio stream from a Blu-ray or DVD container into a WAV file."""
    configure_logging(verbose)

    try:
        config = load_config(config_file)
    except ConfigError as e:
        fail(str(e))

    if write_config_file is not None:
        if write_config_file.exists():
            fail(f"Config file '{write_config_file}' already exists")
        try:
            write_config(config, write_config_file)
        except OSError as e:
            fail(f"Cannot write config {write_config_file}: {e}")
        console.print(styled(f"✓ Wrote config to '{write_config_file}'", Style.SUCCESS))
        return

    from audioex.validation import parse_stream_selector

    ordinal = 0
    stream_specified = False
    if stream is not None:
        try:
            ordinal = parse_stream_selector(stream)
            stream_specified = True
        except InvalidStreamSelectorError as e:
            if config.strict_stream_selector:
                fail(str(e))
            console.print(styled(f"Error: {e}", Style.ERROR))
            console.print(styled("Showing available streams instead...", Style.WARNING))
            console.print()
            info_only = True

    paths = paths or []
    if not 1 <= len(paths) <= 2:
        show_usage()

    input_path = Path(paths[0])
    output_path = Path(paths[1]) if len(paths) == 2 else None

    from audioex.validation import check_ffmpeg, validate_input

    try:
        check_ffmpeg(config)
        checked = validate_input(input_path, config)
    except DependencyError as e:
        fail(e.message, e.install_hint)
    except InputNotFoundError as e:
        fail(str(e))

    for warning in checked["warnings"]:
        console.print(styled(f"Warning: {warning}", Style.WARNING))
        console.print(styled("Supported formats: .m2ts (Blu-ray), .VOB (DVD)"))
        console.print(styled("Continuing anyway..."))

    from audioex.probe import probe_audio_streams

    console.print(styled(f"Analyzing audio streams in '{input_path}'...", Style.WARNING))
    console.print()

    try:
        streams = probe_audio_streams(input_path, config)
    except ProbeError as e:
        fail(str(e))

    print_stream_summary(console, streams)

    if info_only:
        print_stream_details(console, input_path, len(streams), config)
        return

    from audioex.validation import validate_stream_selection

    try:
        validate_stream_selection(ordinal, len(streams), stream_specified)
    except StreamOutOfRangeError as e:
        console.print(styled(f"Error: {e}", Style.ERROR))
        console.print(styled("Showing detailed stream information:", Style.WARNING))
        print_stream_details(console, input_path, len(streams), config)
        raise typer.Exit(1)

    from audioex.utils import default_output_path

    if output_path is None:
        output_path = default_output_path(input_path, ordinal, config)

    if output_path.resolve() == input_path.resolve():
        fail(f"Output file '{output_path}' would overwrite the input file")

    console.print(styled(f"Selected audio stream: {ordinal}", Style.SUCCESS))
    console.print()

    if output_path.exists():
        if force:
            console.print(styled(f"Overwriting existing file '{output_path}'", Style.WARNING))
        else:
            console.print(
                styled(f"Warning: Output file '{output_path}' already exists", Style.WARNING)
            )
            if not confirm_overwrite():
                console.print("Aborted.")
                raise typer.Exit(1)

    from audioex.extract.audio import extract_audio

    try:
        result = extract_audio(
            source_path=input_path,
            output_path=output_path,
            ordinal=ordinal,
            config=config,
            console=console,
        )
    except ExtractionError as e:
        fail(str(e))

    logger.debug("Extraction result: %s", result)

    from audioex.probe import probe_output

    output_info: dict = {}
    try:
        output_info = probe_output(output_path, config)
        print_output_info(console, output_info)
    except ProbeError as e:
        logger.debug("Could not read back %s: %s", output_path, e)

    print_completion(console, output_path, output_info)


if __name__ == "__main__":
    app()
