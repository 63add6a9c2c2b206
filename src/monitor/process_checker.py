"""Game liveness detection.

Answers whether a process with a given executable name is currently
running, using psutil. Each call enumerates the process table afresh.
"""

import logging

import psutil

from src.backup.errors import EnumerationError

logger = logging.getLogger(__name__)


class ProcessChecker:
    """Interface for answering "is this process running right now?"."""

    def is_running(self, name: str) -> bool:
        raise NotImplementedError


class PsutilProcessChecker(ProcessChecker):
    """Checks the host process table through psutil.

    psutil itself skips processes that exit mid-scan and reports the
    name of an access-denied process as None. Any failure to enumerate
    raises EnumerationError.
    """

    def is_running(self, name: str) -> bool:
        try:
            for proc in psutil.process_iter(["name"]):
                if proc.info["name"] == name:
                    logger.debug("Found %s (pid=%d)", name, proc.pid)
                    return True
        except (psutil.Error, OSError) as exc:
            raise EnumerationError(f"Cannot enumerate processes: {exc}") from exc
        return False


def default_checker() -> ProcessChecker:
    return PsutilProcessChecker()
