"""
Reporter for progress display and run output.
"""

import sys
import threading
from typing import List, TextIO

from tqdm import tqdm

from parel_core.executor import JobOutcome
from parel_core.results import RunSummary


SEPARATOR = "=" * 60

PROGRESS_BAR_FORMAT = "[{elapsed}] |{bar}| {n_fmt}/{total_fmt} ({percentage:3.0f}%)"


class ProgressReporter:
    """Progress bar advanced once per completed job from any worker thread."""

    def __init__(self, total: int, file: TextIO | None = None) -> None:
        self._lock = threading.Lock()
        self._bar = tqdm(
            total=total,
            file=file if file is not None else sys.stderr,
            bar_format=PROGRESS_BAR_FORMAT,
            ascii=" >#",
            dynamic_ncols=True,
        )

    @property
    def n(self) -> int:
        return self._bar.n

    def advance(self, outcome: JobOutcome | None = None) -> None:
        """Count one completed job, successful or not."""
        with self._lock:
            self._bar.update(1)

    def close(self) -> None:
        with self._lock:
            self._bar.close()


def print_commands(commands: List[str], file: TextIO | None = None) -> None:
    """Print rendered commands, one per line."""
    for command in commands:
        print(command, file=file)


def print_error(message: str) -> None:
    print(f"error: {message}", file=sys.stderr)


def print_summary(summary: RunSummary, file: TextIO | None = None) -> None:
    """Print run summary."""
    out = file if file is not None else sys.stderr
    print(SEPARATOR, file=out)
    print(f"  Jobs: {summary.n_completed:,}/{summary.n_total:,}", file=out)
    print(f"  Succeeded: {summary.n_succeeded:,}", file=out)
    print(f"  Failed: {summary.n_failed:,}", file=out)
    if summary.n_launch_errors:
        print(f"  Launch errors: {summary.n_launch_errors:,}", file=out)
    print(f"  Elapsed: {summary.elapsed_seconds:.2f}s", file=out)
    print(SEPARATOR, file=out)
