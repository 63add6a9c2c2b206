"""Timed backup loop.

Each cycle waits one full interval, then checks whether the game is
running. If it is, the save directory is zipped into the output directory;
if not, the cycle is skipped. Cycles are strictly sequential and every
error is fatal: the loop stops and hands the failed result back to the
caller, which decides how to exit.
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from src.backup.archiver import create_archive
from src.backup.errors import BackupError
from src.backup.naming import generate_archive_name, unique_archive_path
from src.backup.snapshot_collector import collect_files
from src.config.settings import AppContext, BackupSettings
from src.monitor.process_checker import ProcessChecker, default_checker

logger = logging.getLogger(__name__)

OUTCOME_ARCHIVED = "archived"
OUTCOME_SKIPPED = "skipped"
OUTCOME_FAILED = "failed"

# Most recent cycle results kept in memory
HISTORY_LIMIT = 100


@dataclass
class CycleResult:
    """Record of one backup cycle."""
    timestamp: str
    outcome: str  # "archived", "skipped", "failed"
    archive_path: str | None = None
    file_count: int = 0
    error: BackupError | None = None

    @property
    def failed(self) -> bool:
        return self.outcome == OUTCOME_FAILED


def describe(settings: BackupSettings, output_dir: Path) -> str:
    return (
        f'Saves will be backed up every {settings.interval} minutes '
        f'to "{Path(output_dir).resolve()}".'
    )


class BackupScheduler:
    """Runs backup cycles at a fixed interval until stopped or failed.

    Usage::

        scheduler = BackupScheduler(settings, AppContext(base_dir))
        result = scheduler.run()  # blocks
        if result is not None and result.failed:
            sys.exit(1)
    """

    def __init__(
        self,
        settings: BackupSettings,
        context: AppContext,
        checker: ProcessChecker | None = None,
        clock: Callable[[], datetime] = datetime.now,
        stop_event: threading.Event | None = None,
    ):
        self.settings = settings
        self.context = context
        self.checker = checker or default_checker()
        self.clock = clock
        self.stop_event = stop_event or threading.Event()
        self.save_dir = context.save_dir(settings)
        self.output_dir = context.output_dir(settings)
        self._history: deque[CycleResult] = deque(maxlen=HISTORY_LIMIT)

    @property
    def interval_seconds(self) -> float:
        return self.settings.interval * 60

    def wait_interval(self) -> bool:
        """Block for one interval. Returns False if shutdown was requested."""
        return not self.stop_event.wait(timeout=self.interval_seconds)

    def _record(self, now: datetime, outcome: str, **kwargs) -> CycleResult:
        result = CycleResult(
            timestamp=now.isoformat(),
            outcome=outcome,
            **kwargs,
        )
        self._history.append(result)
        return result

    def run_cycle(self) -> CycleResult:
        """Check liveness and archive the save directory if the game runs."""
        now = self.clock()
        try:
            running = self.checker.is_running(self.settings.process_name)
            if not running:
                logger.info("Game isn't running, skipped backup.")
                return self._record(now, OUTCOME_SKIPPED)

            file_paths = collect_files(str(self.save_dir))
            name = generate_archive_name(now)
            dest = unique_archive_path(self.output_dir, name)
            create_archive(file_paths, dest)
        except BackupError as exc:
            logger.error("Backup cycle failed: %s", exc)
            return self._record(now, OUTCOME_FAILED, error=exc)

        logger.info("%s", dest.name)
        return self._record(
            now,
            OUTCOME_ARCHIVED,
            archive_path=str(dest),
            file_count=len(file_paths),
        )

    def run(self) -> CycleResult | None:
        """Loop until a cycle fails or shutdown is requested.

        Always waits a full interval before the first liveness check.
        Returns the failed cycle, or None after a requested shutdown.
        """
        while self.wait_interval():
            result = self.run_cycle()
            if result.failed:
                return result
        logger.info("Backup scheduler stopped.")
        return None

    def stop(self):
        self.stop_event.set()

    @property
    def history(self) -> list[CycleResult]:
        return list(self._history)
