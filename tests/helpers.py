"""Test doubles shared across the test modules."""

from datetime import datetime

from src.monitor.process_checker import ProcessChecker

# Monday 2 January 2006, 15:04
FIXED_NOW = datetime(2006, 1, 2, 15, 4, 5)


class FakeChecker(ProcessChecker):
    """Scripted liveness answers; records every name it was asked about.

    The last answer repeats once the script runs out. An exception
    instance in the script is raised instead of returned.
    """

    def __init__(self, *answers):
        self.answers = list(answers) or [True]
        self.calls: list[str] = []

    def is_running(self, name: str) -> bool:
        self.calls.append(name)
        answer = self.answers.pop(0) if len(self.answers) > 1 else self.answers[0]
        if isinstance(answer, Exception):
            raise answer
        return answer


class ScriptedEvent:
    """Stands in for threading.Event; records waits into a shared trace.

    ``wait`` reports "not set" for the first ``waits_before_stop`` calls,
    so the loop runs that many cycles before stopping.
    """

    def __init__(self, trace, waits_before_stop):
        self.trace = trace
        self.remaining = waits_before_stop
        self.timeouts = []

    def wait(self, timeout=None):
        self.timeouts.append(timeout)
        self.trace.append("wait")
        if self.remaining <= 0:
            return True
        self.remaining -= 1
        return False

    def set(self):
        self.remaining = 0
