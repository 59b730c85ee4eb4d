from abc import ABC, abstractmethod
from pathlib import Path

from pymonad.either import Either

from .errors import TranscoderError


class Transcoder(ABC):
    """
    Port defining the contract for an audio transcoding service.
    """

    @abstractmethod
    def transcode(self, input_path: Path, output_path: Path) -> Either[TranscoderError, int]:
        """
        Re-encodes the file at input_path into an MP3 at output_path.

        Returns:
            Either: A Right(exit_status) once the process has run,
            or a Left(TranscoderError) if it could not be launched.
        """
        pass
