import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml
from pymonad.either import Either, Left, Right

from playlist_converter.domain.errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConverterConfig:
    """Settings for one conversion run."""
    output_dir: Path = Path("output")
    workers: int = 4
    ffmpeg: str = "ffmpeg"
    audio_quality: str = "2"
    timeout: Optional[float] = None
    strict: bool = False


_FIELD_TYPES = {
    "output_dir": (str,),
    "workers": (int,),
    "ffmpeg": (str,),
    "audio_quality": (str, int),
    "timeout": (int, float),
    "strict": (bool,),
}


def _coerce(key: str, value: Any) -> Either[ConfigError, Any]:
    if value is None and key == "timeout":
        return Right(None)
    expected = _FIELD_TYPES[key]
    # bool is an int subclass
    if isinstance(value, bool) and bool not in expected:
        return Left(ConfigError(f"Invalid value for '{key}': {value!r}"))
    if not isinstance(value, expected):
        return Left(ConfigError(f"Invalid value for '{key}': {value!r}"))
    if key == "output_dir":
        return Right(Path(value))
    if key == "audio_quality":
        quality = str(value).strip()
        if not quality.isdecimal() or not 0 <= int(quality) <= 9:
            return Left(ConfigError(f"'audio_quality' must be an integer from 0 to 9, got {value!r}"))
        return Right(str(int(quality)))
    if key == "workers" and value < 1:
        return Left(ConfigError(f"'workers' must be at least 1, got {value}"))
    if key == "timeout" and value <= 0:
        return Left(ConfigError(f"'timeout' must be greater than 0, got {value}"))
    return Right(value)


def load_config(path: Optional[Path]) -> Either[ConfigError, ConverterConfig]:
    """
    Loads settings from a YAML mapping. Without a path, returns the defaults.

    Unknown keys are ignored with a warning.
    """
    config = ConverterConfig()
    if path is None:
        return Right(config)

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, IOError) as e:
        return Left(ConfigError(f"Cannot read configuration file '{path}': {e}"))

    if data is None:
        return Right(config)
    if not isinstance(data, dict):
        return Left(ConfigError(f"Configuration file '{path}' must contain a mapping."))

    known = {f.name for f in fields(ConverterConfig)}
    values = {}
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown configuration key '{key}' in '{path}'")
            continue
        coerced = _coerce(key, value)
        if coerced.is_left():
            return coerced
        values[key] = coerced.value

    logger.info(f"Loaded configuration from '{path}'")
    return Right(replace(config, **values))


def apply_overrides(config: ConverterConfig, **overrides: Any) -> ConverterConfig:
    """Returns config with every override that is not None applied."""
    return replace(config, **{k: v for k, v in overrides.items() if v is not None})
