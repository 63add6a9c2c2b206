"""Configuration loading and validation.

The config file is plain JSON::

    {
        "savePath": "C:/Users/me/AppData/Local/MedievalDynasty/Saved/SaveGames",
        "outPath": "backups",
        "interval": 10,
        "processName": "Medieval_Dynasty-Win64-Shipping.exe"
    }

Settings are validated once at startup and never re-read during a run.
Relative paths are resolved against the base directory held by
``AppContext`` rather than by changing the process working directory.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from src.backup.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_PROCESS_NAME = "Medieval_Dynasty-Win64-Shipping.exe"

MIN_INTERVAL_MINUTES = 5
MAX_INTERVAL_MINUTES = 60


@dataclass(frozen=True)
class BackupSettings:
    """Validated settings for one run of the scheduler."""
    save_path: str
    out_path: str
    interval: int  # minutes
    process_name: str = DEFAULT_PROCESS_NAME


@dataclass(frozen=True)
class AppContext:
    """Base directory that relative configuration paths are resolved against."""
    base_dir: Path

    def resolve(self, path_str: str) -> Path:
        path = Path(os.path.expanduser(os.path.expandvars(path_str)))
        if not path.is_absolute():
            path = self.base_dir / path
        return path.resolve()

    def save_dir(self, settings: BackupSettings) -> Path:
        return self.resolve(settings.save_path)

    def output_dir(self, settings: BackupSettings) -> Path:
        """Directory that receives archives; the base directory when unset."""
        if not settings.out_path:
            return self.base_dir.resolve()
        return self.resolve(settings.out_path)


def load_config(config_path: str) -> dict:
    path = Path(config_path)
    if not path.is_file():
        raise ConfigurationError(f"Config file not found: {config_path}")
    try:
        with open(path) as f:
            raw = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in {config_path}: {exc}") from exc
    except OSError as exc:
        raise ConfigurationError(f"Cannot read {config_path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config root must be an object: {config_path}")
    return raw


def parse_settings(raw: dict) -> BackupSettings:
    """Validate a raw config mapping and build ``BackupSettings``.

    Raises ConfigurationError for an empty save path, a non-string out
    path, or an interval outside [5, 60] minutes.
    """
    save_path = raw.get("savePath") or ""
    if not isinstance(save_path, str) or not save_path.strip():
        raise ConfigurationError("Save path is empty.")

    out_path = raw.get("outPath") or ""
    if not isinstance(out_path, str):
        raise ConfigurationError("Out path must be a string.")

    interval = raw.get("interval")
    # bool is an int subclass; reject it explicitly
    if (
        not isinstance(interval, int)
        or isinstance(interval, bool)
        or not MIN_INTERVAL_MINUTES <= interval <= MAX_INTERVAL_MINUTES
    ):
        raise ConfigurationError(
            f"Interval must be between {MIN_INTERVAL_MINUTES} and "
            f"{MAX_INTERVAL_MINUTES}."
        )

    process_name = raw.get("processName") or DEFAULT_PROCESS_NAME
    if not isinstance(process_name, str):
        raise ConfigurationError("Process name must be a string.")

    return BackupSettings(
        save_path=save_path,
        out_path=out_path,
        interval=interval,
        process_name=process_name,
    )


def load_settings(config_path: str) -> BackupSettings:
    settings = parse_settings(load_config(config_path))
    logger.debug("Loaded settings from %s: %s", config_path, settings)
    return settings


def prepare_output_dir(path: Path) -> Path:
    """Create the output directory (and parents) if it does not exist."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise ConfigurationError(f"Cannot create output directory {path}: {exc}") from exc
    return path
