# playlist_converter/domain/errors.py
from dataclasses import dataclass


@dataclass(frozen=True)
class AppError:
    """Base class for application errors."""
    message: str


@dataclass(frozen=True)
class ConfigError(AppError):
    """Invalid configuration file or option."""
    pass


@dataclass(frozen=True)
class PlaylistError(AppError):
    """An input playlist could not be opened or read."""
    pass


@dataclass(frozen=True)
class OutputError(AppError):
    """The output directory tree or an output playlist could not be written."""
    pass


@dataclass(frozen=True)
class TranscoderError(AppError):
    """The transcoder process could not be launched or did not finish."""
    pass
