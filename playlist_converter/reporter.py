import logging

from playlist_converter.domain.models import (
    ProcessFailure,
    RunSummary,
    Success,
    TaskResult,
)

logger = logging.getLogger(__name__)


class ProgressReporter:
    """
    Logs one `(i/total) <output_path>: <message>` line per finished task.

    Conversions take indices 1..num_convert_tasks in the order their results
    are received. Copies follow, indexed by their submission position.
    """

    def __init__(self, num_convert_tasks: int, num_copy_tasks: int):
        self.num_convert_tasks = num_convert_tasks
        self.num_copy_tasks = num_copy_tasks
        self.total = num_convert_tasks + num_copy_tasks
        self._received = 0
        self._converted = 0
        self._copied = 0
        self._failed = 0

    def conversion_finished(self, result: TaskResult) -> int:
        self._received += 1
        index = self._received
        outcome = result.outcome
        if isinstance(outcome, Success):
            self._converted += 1
            self._log_success(index, result, "Conversion succeeded.")
        elif isinstance(outcome, ProcessFailure):
            self._failed += 1
            self._log_failure(index, result, f"FFmpeg exited with non-zero status {outcome.exit_status}")
        else:
            self._failed += 1
            self._log_failure(index, result, f"Failed to execute FFmpeg ({outcome.cause})")
        return index

    def copy_finished(self, position: int, result: TaskResult) -> int:
        index = self.num_convert_tasks + position + 1
        outcome = result.outcome
        if isinstance(outcome, Success):
            self._copied += 1
            self._log_success(index, result, "Copying succeeded.")
        else:
            self._failed += 1
            self._log_failure(index, result, f"Failed to copy file ({outcome.cause})")
        return index

    def _log_success(self, index: int, result: TaskResult, message: str) -> None:
        logger.info(f"({index}/{self.total}) {result.output_path}: {message}")

    def _log_failure(self, index: int, result: TaskResult, message: str) -> None:
        logger.warning(f"({index}/{self.total}) {result.output_path}: {message}")

    def summary(self) -> RunSummary:
        return RunSummary(
            converted=self._converted,
            copied=self._copied,
            failed=self._failed,
            total=self.total,
        )
