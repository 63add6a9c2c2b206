"""Collects the save files to archive for one backup cycle."""

import logging
import os

from src.backup.errors import DirectoryReadError

logger = logging.getLogger(__name__)


def collect_files(dir_path: str) -> list[str]:
    """Return paths of the non-directory entries directly under ``dir_path``.

    The listing is not recursive. An existing directory with no files
    yields an empty list.
    """
    file_paths = []
    try:
        with os.scandir(dir_path) as entries:
            for entry in entries:
                if entry.is_dir():
                    continue
                file_paths.append(os.path.join(dir_path, entry.name))
    except OSError as exc:
        raise DirectoryReadError(f"Cannot list save directory {dir_path}: {exc}") from exc

    logger.debug("Collected %d file(s) from %s", len(file_paths), dir_path)
    return file_paths
