import threading
import time
from pathlib import Path

import pytest
from pymonad.either import Left, Right

from playlist_converter.domain.errors import TranscoderError
from playlist_converter.domain.ports import Transcoder


class FakeTranscoder(Transcoder):
    """
    Stands in for ffmpeg. Behaviour is chosen per input file name:
    an int is the exit status, "launch" fails to start, "raise" raises.
    Successful runs write a small file at the output path.
    """

    def __init__(self, behaviours=None, delays=None, on_call=None):
        self.behaviours = behaviours or {}
        self.delays = delays or {}
        self.on_call = on_call
        self.calls = []
        self._lock = threading.Lock()

    def transcode(self, input_path: Path, output_path: Path):
        with self._lock:
            self.calls.append((input_path, output_path))
        if self.on_call:
            self.on_call(input_path, output_path)
        time.sleep(self.delays.get(input_path.name, 0))

        behaviour = self.behaviours.get(input_path.name, 0)
        if behaviour == "launch":
            return Left(TranscoderError("No such file or directory: 'ffmpeg'"))
        if behaviour == "raise":
            raise RuntimeError("transcoder crashed")
        if behaviour == 0:
            output_path.write_bytes(b"ID3 fake mp3")
        return Right(behaviour)


@pytest.fixture
def fake_transcoder():
    """Provides a FakeTranscoder where every conversion succeeds."""
    return FakeTranscoder()


@pytest.fixture
def write_playlist(tmp_path):
    """Writes an M3U file with the given lines and returns its path."""

    def _write(name, lines, directory=None):
        directory = directory or tmp_path
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def transcoder_factory():
    """Builds a FakeTranscoder with custom behaviours."""
    return FakeTranscoder
