import logging
from pathlib import Path, PurePath
from typing import Optional

from .models import ClassifiedTask, TaskKind

logger = logging.getLogger(__name__)

MP3_EXTENSION = "mp3"


def file_extension(path: PurePath) -> Optional[str]:
    """
    Returns the text after the last dot of the file name.

    A leading dot alone (".hidden") is not an extension, a trailing dot
    ("song.") is an empty one.
    """
    name = path.name
    index = name.rfind(".")
    if index <= 0:
        return None
    return name[index + 1:]


def with_extension(path: PurePath, extension: str) -> PurePath:
    name = path.name
    index = name.rfind(".")
    stem = name[:index] if index > 0 else name
    return path.with_name(f"{stem}.{extension}")


def relative_to_anchor(path: PurePath) -> PurePath:
    """Drops the root or drive of an absolute path so it can live under another directory."""
    if path.anchor:
        return PurePath(*path.parts[1:])
    return path


def windows_path(path: PurePath) -> str:
    """Joins the components of a relative path with backslashes."""
    return "\\".join(part for part in path.parts if part not in ("", "/", "\\"))


def playlist_directory(playlist_path: Path) -> Path:
    parent = playlist_path.parent
    if str(parent) == "":
        return Path(".")
    return parent


def classify(entry_path: str, playlist_dir: Path, output_root: Path) -> Optional[ClassifiedTask]:
    """
    Decides whether a playlist entry is copied or converted.

    Args:
        entry_path: The path as written in the playlist.
        playlist_dir: Directory containing the playlist, used to resolve relative entries.
        output_root: Directory receiving the converted media.

    Returns:
        The classified task, or None if the entry has no file extension.
    """
    entry = PurePath(entry_path)
    extension = file_extension(entry)
    if extension is None:
        logger.warning(f"{entry_path}: Failed to determine file extension")
        return None

    relative = relative_to_anchor(entry)
    if extension == MP3_EXTENSION:
        kind = TaskKind.COPY
    else:
        kind = TaskKind.CONVERT
        relative = with_extension(relative, MP3_EXTENSION)

    return ClassifiedTask(
        input_path=playlist_dir / entry,
        output_path=output_root / relative,
        kind=kind,
        playlist_path=windows_path(relative),
    )
