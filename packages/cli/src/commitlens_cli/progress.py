"""Scanning progress bar shown while the review service is working."""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor, wait

from rich.console import Console
from rich.progress import BarColumn, Progress, TextColumn

from commitlens_core.utils.progress import DONE, TICK_SECONDS, ScanProgress


class ProgressReviewer:
    """Wraps a reviewer and animates a progress bar while review_diff runs.

    The review call runs on a single worker thread; the bar is advanced from
    the calling thread on a timer and says nothing about real progress.
    """

    def __init__(self, reviewer, console: Console, tick: float = TICK_SECONDS, settle: float = 0.3):
        self._reviewer = reviewer
        self._console = console
        self._tick = tick
        self._settle = settle

    def review_diff(self, diff_text: str) -> str:
        scan = ScanProgress()
        with Progress(
            TextColumn("[magenta]AI agent is scanning the code..."),
            BarColumn(),
            TextColumn("{task.percentage:>3.0f}%"),
            console=self._console,
            transient=True,
        ) as progress:
            task = progress.add_task("review", total=DONE)
            with ThreadPoolExecutor(max_workers=1) as pool:
                future = pool.submit(self._reviewer.review_diff, diff_text)
                while not future.done():
                    wait([future], timeout=self._tick)
                    if not future.done():
                        progress.update(task, completed=scan.advance())
            # Raises the reviewer's own exception, if any.
            result = future.result()
            progress.update(task, completed=scan.complete())
            if self._settle:
                time.sleep(self._settle)
        return result
