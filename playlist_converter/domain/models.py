from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Union


@dataclass(frozen=True)
class LocalPath:
    """A playlist entry pointing at a file on disk."""
    path: str


@dataclass(frozen=True)
class RemoteUrl:
    """A playlist entry pointing at a URL."""
    url: str


PlaylistEntry = Union[LocalPath, RemoteUrl]


class TaskKind(Enum):
    COPY = "copy"
    CONVERT = "convert"


@dataclass(frozen=True)
class ClassifiedTask:
    """A single file operation derived from one playlist entry."""
    input_path: Path
    output_path: Path
    kind: TaskKind
    playlist_path: str


@dataclass
class WorkBatch:
    """Accumulates copy and convert tasks across all input playlists."""
    copy_tasks: List[ClassifiedTask] = field(default_factory=list)
    convert_tasks: List[ClassifiedTask] = field(default_factory=list)

    def add(self, task: ClassifiedTask) -> None:
        if task.kind is TaskKind.COPY:
            self.copy_tasks.append(task)
        else:
            self.convert_tasks.append(task)

    @property
    def total(self) -> int:
        return len(self.copy_tasks) + len(self.convert_tasks)


@dataclass(frozen=True)
class Success:
    pass


@dataclass(frozen=True)
class ProcessFailure:
    """The transcoder ran but exited with a non-zero status."""
    exit_status: int


@dataclass(frozen=True)
class ExecutionError:
    """The operation could not be carried out at all."""
    cause: str


Outcome = Union[Success, ProcessFailure, ExecutionError]


@dataclass(frozen=True)
class TaskResult:
    output_path: Path
    outcome: Outcome


@dataclass(frozen=True)
class RunSummary:
    """Tally of a finished run."""
    converted: int
    copied: int
    failed: int
    total: int
