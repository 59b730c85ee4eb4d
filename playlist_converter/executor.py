"""
Execution of the copy and convert work lists.

Conversions run on a fixed-size thread pool, each worker blocking on one
transcoder process. Results travel back through a single queue and are
reported in the order they arrive. Copies run afterwards on the calling
thread, one at a time.
"""

import logging
import queue
import shutil
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import List

from pymonad.either import Either, Left, Right

from playlist_converter.domain.errors import AppError, ConfigError, OutputError
from playlist_converter.domain.models import (
    ClassifiedTask,
    ExecutionError,
    ProcessFailure,
    Success,
    TaskResult,
)
from playlist_converter.domain.ports import Transcoder
from playlist_converter.reporter import ProgressReporter

logger = logging.getLogger(__name__)

DEFAULT_WORKERS = 4


def ensure_parent_dir(path: Path) -> Either[OutputError, Path]:
    """Creates the parent directory of path. An existing directory is fine."""
    parent = path.parent
    try:
        parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Failed to create directory '{parent}': {e}")
        return Left(OutputError(f"Cannot create directory '{parent}': {e}"))
    return Right(parent)


def _convert_one(task: ClassifiedTask, transcoder: Transcoder, results: "queue.Queue[TaskResult]") -> None:
    """Worker body. Always puts exactly one result on the queue."""
    outcome = ExecutionError("worker stopped before the transcoder returned")
    try:
        outcome = transcoder.transcode(task.input_path, task.output_path).either(
            lambda error: ExecutionError(error.message),
            lambda status: Success() if status == 0 else ProcessFailure(status),
        )
    except Exception as e:
        logger.error(f"{task.output_path}: transcoder raised {e!r}", exc_info=True)
        outcome = ExecutionError(str(e) or type(e).__name__)
    finally:
        results.put(TaskResult(task.output_path, outcome))


def _report_pending(results: "queue.Queue[TaskResult]", reporter: ProgressReporter) -> int:
    """Reports results already queued by finished workers. Call after the pool has shut down."""
    reported = 0
    while True:
        try:
            result = results.get_nowait()
        except queue.Empty:
            return reported
        reporter.conversion_finished(result)
        reported += 1


def run_conversions(
    tasks: List[ClassifiedTask],
    transcoder: Transcoder,
    reporter: ProgressReporter,
    workers: int = DEFAULT_WORKERS,
) -> Either[AppError, int]:
    """
    Converts every task on a pool of `workers` threads.

    Returns:
        Either: A Right(number of results received), always len(tasks), or a
        Left if a destination directory could not be created.
    """
    if not tasks:
        return Right(0)
    if workers < 1:
        return Left(ConfigError(f"At least one conversion worker is required, got {workers}."))

    results: "queue.Queue[TaskResult]" = queue.Queue()
    pool = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="convert")
    try:
        for task in tasks:
            created = ensure_parent_dir(task.output_path)
            if created.is_left():
                pool.shutdown(wait=True, cancel_futures=True)
                _report_pending(results, reporter)
                return created
            pool.submit(_convert_one, task, transcoder, results)

        received = 0
        while received < len(tasks):
            reporter.conversion_finished(results.get())
            received += 1
    finally:
        pool.shutdown(wait=True)

    return Right(received)


def run_copies(tasks: List[ClassifiedTask], reporter: ProgressReporter) -> Either[AppError, int]:
    """
    Copies every task in order on the calling thread.

    A failed copy is reported and skipped. Only a directory that cannot be
    created stops the loop.
    """
    for position, task in enumerate(tasks):
        created = ensure_parent_dir(task.output_path)
        if created.is_left():
            return created
        try:
            shutil.copy(task.input_path, task.output_path)
            outcome = Success()
        except OSError as e:
            outcome = ExecutionError(str(e))
        reporter.copy_finished(position, TaskResult(task.output_path, outcome))
    return Right(len(tasks))
