"""Error taxonomy for the backup scheduler.

Every error here is fatal: the scheduler stops on the first one and the
launcher exits non-zero. A game that is not running is not an error.
"""


class BackupError(Exception):
    """Base class for all backup scheduler failures."""


class ConfigurationError(BackupError):
    """Settings are missing, malformed, or out of range."""


class EnumerationError(BackupError):
    """The host process table could not be read."""


class DirectoryReadError(BackupError):
    """The save directory could not be listed."""


class CreateError(BackupError):
    """The archive file could not be created."""


class SourceReadError(BackupError):
    """A save file could not be opened or read while archiving."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
