import logging
from pathlib import Path
from typing import Iterable

from pymonad.either import Either, Left, Right

from playlist_converter.adapters.m3u_adapter import M3UWriter, read_entries
from playlist_converter.domain.classifier import classify, playlist_directory
from playlist_converter.domain.errors import AppError, OutputError
from playlist_converter.domain.models import RemoteUrl, WorkBatch

logger = logging.getLogger(__name__)


def partition_playlist(playlist_path: Path, batch: WorkBatch, output_root: Path) -> Either[AppError, WorkBatch]:
    """
    Classifies the entries of one playlist into the batch and writes its rewritten copy.

    The output playlist is named after the input and placed in output_root.
    Every surviving entry is written as a Windows path before the next one is
    read, and the file is closed before this function returns.
    """
    logger.info(f"Parsing Playlist: {playlist_path}")
    read = read_entries(playlist_path)
    if read.is_left():
        return read

    created = M3UWriter.create(output_root / playlist_path.name)
    if created.is_left():
        return created
    writer = created.value

    playlist_dir = playlist_directory(playlist_path)
    try:
        with writer:
            for entry in read.value:
                if entry.is_left():
                    error, _ = entry.monoid
                    logger.warning(f"Failed to read playlist entry: {error.message}")
                    continue
                item = entry.value
                if isinstance(item, RemoteUrl):
                    logger.warning(f"Ignoring URL: {item.url}")
                    continue
                task = classify(item.path, playlist_dir, output_root)
                if task is None:
                    continue
                batch.add(task)
                writer.write_entry(task.playlist_path)
    except OSError as e:
        logger.error(f"Failed to write playlist '{writer.path}': {e}")
        return Left(OutputError(f"Cannot write playlist '{writer.path}': {e}"))

    logger.info(f"Wrote Playlist: {writer.path}")
    return Right(batch)


def plan(playlists: Iterable[Path], output_root: Path) -> Either[AppError, WorkBatch]:
    """
    Builds the work batch for all playlists, in argument order.

    Stops at the first playlist that cannot be read or written.
    """
    result = Right(WorkBatch())
    for playlist_path in playlists:
        result = result.bind(lambda batch, path=playlist_path: partition_playlist(path, batch, output_root))
    return result
