"""Zip archive creation.

Writes a flat, deflate-compressed zip of the given files. The archive is
built in a temporary ``.part`` file next to the destination and moved into
place only after it has been fully written and closed, so a failed run
never leaves a truncated archive under the final name.
"""

import logging
import os
import tempfile
import zipfile
from pathlib import Path

from src.backup.errors import CreateError, SourceReadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 65536
ARCHIVE_FILE_MODE = 0o644
TEMP_SUFFIX = ".part"


def _add_file(zf: zipfile.ZipFile, file_path: str) -> int:
    """Stream one file into the archive under its base name.

    Returns the number of bytes copied.
    """
    arcname = os.path.basename(file_path)
    try:
        src = open(file_path, "rb")
    except OSError as exc:
        raise SourceReadError(file_path, str(exc)) from exc

    with src:
        try:
            info = zipfile.ZipInfo.from_file(
                file_path, arcname=arcname, strict_timestamps=False,
            )
        except OSError as exc:
            raise SourceReadError(file_path, str(exc)) from exc
        info.compress_type = zipfile.ZIP_DEFLATED

        copied = 0
        with zf.open(info, "w", force_zip64=True) as dest:
            while True:
                try:
                    chunk = src.read(CHUNK_SIZE)
                except OSError as exc:
                    raise SourceReadError(file_path, str(exc)) from exc
                if not chunk:
                    break
                dest.write(chunk)
                copied += len(chunk)

    logger.debug("Added %s (%d bytes) as %s", file_path, copied, arcname)
    return copied


def create_archive(file_paths: list[str], destination) -> Path:
    """Create a zip at ``destination`` containing ``file_paths``.

    The parent directory of ``destination`` must already exist. Raises
    CreateError if the archive cannot be written and SourceReadError if an
    input file cannot be read. An empty ``file_paths`` produces a valid
    zip with no entries.
    """
    destination = Path(destination)
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{destination.name}.",
            suffix=TEMP_SUFFIX,
            dir=str(destination.parent),
        )
    except OSError as exc:
        raise CreateError(f"Cannot create archive {destination}: {exc}") from exc

    try:
        with os.fdopen(fd, "wb") as tmp_file:
            with zipfile.ZipFile(tmp_file, "w", compression=zipfile.ZIP_DEFLATED) as zf:
                for file_path in file_paths:
                    _add_file(zf, file_path)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())

        try:
            os.chmod(tmp_name, ARCHIVE_FILE_MODE)
        except OSError:
            logger.debug("Could not set archive permissions (may be on Windows)")

        os.replace(tmp_name, destination)
    except SourceReadError:
        _discard(tmp_name)
        raise
    except OSError as exc:
        _discard(tmp_name)
        raise CreateError(f"Cannot write archive {destination}: {exc}") from exc

    logger.debug("Wrote %s with %d file(s)", destination, len(file_paths))
    return destination


def _discard(tmp_name: str):
    try:
        os.remove(tmp_name)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not remove partial archive %s: %s", tmp_name, exc)
