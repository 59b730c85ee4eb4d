import typer
import logging
from rich.console import Console
from rich.markup import escape
from pathlib import Path
from typing import List, Optional
from toolz import pipe

from . import logger_config  # configures the root logger
from . import __version__
from .adapters.ffmpeg_adapter import FFmpegTranscoder
from .config import ConverterConfig, apply_overrides, load_config
from .domain.errors import AppError
from .domain.models import RunSummary
from .i18n import get_message, set_lang
from .runner import run

# Initialization
console = Console()
logger = logging.getLogger(__name__)

app = typer.Typer(
    name="playlist-converter",
    help="Converts playlists into a Ford Sync 2 compatible format.",
    add_completion=False,
)

STRICT_EXIT_CODE = 2


# --- Helper Functions ---


def _handle_error(error: AppError) -> None:
    """Displays a formatted error message and exits the application."""
    console.print(f"[bold red]Error:[/bold red] {escape(error.message)}")
    raise typer.Exit(code=1)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"playlist-converter {__version__}")
        raise typer.Exit()


def _positive_timeout(value: Optional[float]) -> Optional[float]:
    if value is not None and value <= 0:
        raise typer.BadParameter("must be greater than 0.")
    return value


def _build_transcoder(config: ConverterConfig) -> FFmpegTranscoder:
    return FFmpegTranscoder(
        binary=config.ffmpeg,
        audio_quality=config.audio_quality,
        timeout=config.timeout,
    )


# --- CLI Command ---


@app.command()
def convert(
    playlists: List[Path] = typer.Argument(..., help=get_message("help_playlists")),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help=get_message("help_output_dir"), show_default="output"
    ),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-w", min=1, help=get_message("help_workers"), show_default="4"
    ),
    ffmpeg: Optional[str] = typer.Option(
        None, "--ffmpeg", help=get_message("help_ffmpeg"), show_default="ffmpeg"
    ),
    quality: Optional[int] = typer.Option(
        None, "--quality", "-q", min=0, max=9, help=get_message("help_quality"), show_default="2"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", callback=_positive_timeout, help=get_message("help_timeout")
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help=get_message("help_config"),
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
    strict: Optional[bool] = typer.Option(
        None, "--strict/--no-strict", help=get_message("help_strict"), show_default=False
    ),
    lang: Optional[str] = typer.Option(
        None, "--lang", help=get_message("help_lang"), show_default=False
    ),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help=get_message("help_version")
    ),
):
    """Converts playlists into a Ford Sync 2 compatible format."""
    if lang:
        set_lang(lang)
        logger.info(f"Language explicitly set to: {lang}")

    def with_overrides(config: ConverterConfig) -> ConverterConfig:
        return apply_overrides(
            config,
            output_dir=output_dir,
            workers=workers,
            ffmpeg=ffmpeg,
            audio_quality=None if quality is None else str(quality),
            timeout=timeout,
            strict=strict,
        )

    def convert_flow(config: ConverterConfig):
        logger.info(
            f"Output directory: {config.output_dir}, Workers: {config.workers}, FFmpeg: {config.ffmpeg}"
        )
        console.print(
            get_message("run_started", count=len(playlists), output_dir=config.output_dir)
        )
        return run(playlists, config, _build_transcoder(config)).map(
            lambda summary: (config, summary)
        )

    def on_success(finished) -> None:
        config, summary = finished
        _print_summary(summary)
        if config.strict and summary.failed:
            raise typer.Exit(code=STRICT_EXIT_CODE)

    pipe(
        load_config(config_file),
        lambda e: e.map(with_overrides),
        lambda e: e.bind(convert_flow),
        lambda e: e.either(_handle_error, on_success),
    )


def _print_summary(summary: RunSummary) -> None:
    style = "bold yellow" if summary.failed else "bold green"
    console.print(
        f"[{style}]{get_message('run_completed', converted=summary.converted, copied=summary.copied, failed=summary.failed, total=summary.total)}[/{style}]"
    )
    if summary.failed:
        console.print(f"[yellow]{get_message('run_failures', failed=summary.failed)}[/yellow]")


if __name__ == "__main__":
    app()
