import logging
from pathlib import Path
from typing import List
from urllib.parse import urlparse

from pymonad.either import Either, Left, Right

from playlist_converter.domain.errors import AppError, OutputError, PlaylistError
from playlist_converter.domain.models import LocalPath, PlaylistEntry, RemoteUrl

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"


def parse_entry(line: str) -> PlaylistEntry:
    """
    Turns a non-comment playlist line into a path or URL entry.

    Single letter schemes are Windows drive letters ("C:\\Music\\a.flac"), not URLs.
    """
    try:
        parsed = urlparse(line)
    except ValueError:
        return LocalPath(line)
    if len(parsed.scheme) > 1:
        return RemoteUrl(line)
    return LocalPath(line)


def read_entries(playlist_path: Path) -> Either[PlaylistError, List[Either[AppError, PlaylistEntry]]]:
    """
    Reads a whole M3U playlist into memory.

    Returns:
        Either: A Right with one Either per entry line (Left for a line that
        cannot be decoded), or a Left(PlaylistError) if the file cannot be read.
    """
    try:
        data = playlist_path.read_bytes()
    except OSError as e:
        logger.error(f"Failed to open playlist '{playlist_path}': {e}")
        return Left(PlaylistError(f"Cannot open playlist '{playlist_path}': {e}"))

    if data.startswith(UTF8_BOM):
        data = data[len(UTF8_BOM):]

    entries = []
    for number, raw_line in enumerate(data.splitlines(), start=1):
        try:
            line = raw_line.decode("utf-8").strip()
        except UnicodeDecodeError as e:
            entries.append(Left(AppError(f"{playlist_path}:{number}: {e}")))
            continue
        if not line or line.startswith("#"):
            continue
        entries.append(Right(parse_entry(line)))
    return Right(entries)


class M3UWriter:
    """
    Writes path entries to a plain M3U file, one per line.
    """

    def __init__(self, path: Path, handle):
        self.path = path
        self._handle = handle

    @classmethod
    def create(cls, path: Path) -> Either[OutputError, "M3UWriter"]:
        try:
            handle = open(path, "w", encoding="utf-8", newline="\n")
        except OSError as e:
            logger.error(f"Failed to create playlist '{path}': {e}")
            return Left(OutputError(f"Cannot create playlist '{path}': {e}"))
        return Right(cls(path, handle))

    def write_entry(self, entry: str) -> None:
        self._handle.write(f"{entry}\n")

    def close(self) -> None:
        self._handle.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
