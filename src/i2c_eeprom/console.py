"""Terminal progress for whole-device transfers using Rich."""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)

from .transfer.monitor import TransferMonitor


class RichMonitor(TransferMonitor):
    """Shows one progress bar per transfer, advanced once per page.

    Transient bus failures are counted in a column next to the bar, as a
    live indication that another master is contending for the bus.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console if console is not None else Console(stderr=True)
        self.total_retries = 0
        self._retries = 0
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def start(self, label: str, pages: int) -> None:
        self._retries = 0
        self._progress = Progress(
            TextColumn("[bold]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TextColumn("pages"),
            TextColumn("[red]{task.fields[retries]} retries"),
            TimeElapsedColumn(),
            console=self.console,
        )
        self._task = self._progress.add_task(label, total=pages, retries=0)
        self._progress.start()

    def page_done(self, address: int, length: int) -> None:
        if self._progress is not None and self._task is not None:
            self._progress.advance(self._task)

    def retry(self, address: int, stage: str) -> None:
        self.total_retries += 1
        self._retries += 1
        if self._progress is not None and self._task is not None:
            self._progress.update(self._task, retries=self._retries)

    def finish(self) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task = None
