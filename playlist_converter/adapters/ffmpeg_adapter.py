import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from pymonad.either import Either, Left, Right

from playlist_converter.domain.errors import TranscoderError
from playlist_converter.domain.ports import Transcoder

logger = logging.getLogger(__name__)


class FFmpegTranscoder(Transcoder):
    """
    Adapter running ffmpeg as a separate process to re-encode audio into MP3.
    """

    def __init__(self, binary: str = "ffmpeg", audio_quality: str = "2", timeout: Optional[float] = None):
        self._binary = binary
        self._audio_quality = audio_quality
        self._timeout = timeout

    def _build_args(self, input_path: Path, output_path: Path) -> List[str]:
        """Overwrite without prompting, drop video streams, constant-quality audio."""
        return [
            self._binary,
            "-i", str(input_path),
            "-y",
            "-vn",
            "-aq", self._audio_quality,
            str(output_path),
        ]

    def transcode(self, input_path: Path, output_path: Path) -> Either[TranscoderError, int]:
        args = self._build_args(input_path, output_path)
        logger.debug(f"Running: {' '.join(args)}")

        try:
            completed = subprocess.run(args, capture_output=True, timeout=self._timeout)
        except subprocess.TimeoutExpired:
            return Left(TranscoderError(f"timed out after {self._timeout} seconds"))
        except OSError as e:
            return Left(TranscoderError(str(e)))

        if completed.returncode != 0:
            stderr = completed.stderr.decode("utf-8", errors="replace").strip()
            if stderr:
                logger.debug(f"{output_path}: ffmpeg stderr:\n{stderr}")
        return Right(completed.returncode)
