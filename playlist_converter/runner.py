import logging
from pathlib import Path
from typing import List

from pymonad.either import Either, Left, Right

from playlist_converter.config import ConverterConfig
from playlist_converter.domain.errors import AppError, OutputError
from playlist_converter.domain.models import RunSummary, WorkBatch
from playlist_converter.domain.ports import Transcoder
from playlist_converter.executor import run_conversions, run_copies
from playlist_converter.planner import plan
from playlist_converter.reporter import ProgressReporter

logger = logging.getLogger(__name__)


def prepare_output_dir(output_dir: Path) -> Either[OutputError, Path]:
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create output directory '{output_dir}': {e}")
        return Left(OutputError(f"Cannot create output directory '{output_dir}': {e}"))
    return Right(output_dir)


def execute(batch: WorkBatch, transcoder: Transcoder, workers: int) -> Either[AppError, RunSummary]:
    """Converts, then copies. The copy stage starts only once every conversion result is in."""
    logger.info(f"Files to copy: {len(batch.copy_tasks)}")
    logger.info(f"Files to convert: {len(batch.convert_tasks)}")

    reporter = ProgressReporter(len(batch.convert_tasks), len(batch.copy_tasks))

    logger.info("Starting convert files...")
    converted = run_conversions(batch.convert_tasks, transcoder, reporter, workers)
    if converted.is_left():
        return converted

    logger.info("Starting to copy files...")
    copied = run_copies(batch.copy_tasks, reporter)
    if copied.is_left():
        return copied

    summary = reporter.summary()
    log = logger.warning if summary.failed else logger.info
    log(
        f"Finished: {summary.converted} converted, {summary.copied} copied, "
        f"{summary.failed} failed (of {summary.total})"
    )
    return Right(summary)


def run(playlists: List[Path], config: ConverterConfig, transcoder: Transcoder) -> Either[AppError, RunSummary]:
    """
    Runs a whole conversion: output directory, playlists, conversions, copies.

    Every output playlist is written before any media is converted or copied.
    """
    return (
        prepare_output_dir(config.output_dir)
        .bind(lambda output_dir: plan(playlists, output_dir))
        .bind(lambda batch: execute(batch, transcoder, config.workers))
    )
