"""Rich-based sync progress display."""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.filesize import decimal
from rich.markup import escape
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.progress import TaskID as RichTaskID

from restic_sync.core.engine.progress import SyncProgress

_CATEGORY_STYLE = "green"
_SETUP_STYLE = "cyan"
_SETUP_PHASES = frozenset({"Init", "Config"})
_MAX_ERROR_WIDTH = 60


class RichSyncProgress(SyncProgress):
    """Live display with one row per phase.

    Category rows show objects handled out of the planned total, the bytes
    copied so far and the missing/extra counts from the listing diff. A failed
    row is marked red and carries the error message.

        with RichSyncProgress() as progress:
            result = await ResticSync.from_config(config, progress=progress).sync()
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)
        self._progress = Progress(
            SpinnerColumn(finished_text="[green]✓[/green]"),
            TextColumn("{task.description:>12}"),
            BarColumn(bar_width=30),
            MofNCompleteColumn(),
            TextColumn("{task.fields[copied]:>9}"),
            TimeElapsedColumn(),
            TextColumn("{task.fields[detail]}"),
            console=self._console,
            transient=False,
        )
        self._task_ids: dict[str, RichTaskID] = {}
        self._bytes: dict[str, int] = {}

    def __enter__(self) -> RichSyncProgress:
        self._progress.start()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def phase_start(self, phase: str) -> None:
        style = _SETUP_STYLE if phase in _SETUP_PHASES else _CATEGORY_STYLE
        self._bytes[phase] = 0
        self._task_ids[phase] = self._progress.add_task(f"[{style}]{phase}[/]", total=None, copied="", detail="")

    def phase_planned(self, phase: str, *, to_transfer: int, to_delete: int) -> None:
        task_id = self._task_ids.get(phase)
        if task_id is None:
            return
        detail = f"{to_transfer} missing, {to_delete} extra" if to_transfer or to_delete else "up to date"
        self._progress.update(task_id, total=to_transfer + to_delete, detail=detail)

    def object_done(self, phase: str, *, size: int = 0) -> None:
        task_id = self._task_ids.get(phase)
        if task_id is None:
            return
        self._bytes[phase] = self._bytes.get(phase, 0) + size
        self._progress.update(task_id, advance=1, copied=decimal(self._bytes[phase]) if self._bytes[phase] else "")

    def phase_done(self, phase: str, *, detail: str | None = None) -> None:
        task_id = self._task_ids.get(phase)
        if task_id is None:
            return
        task = self._progress.tasks[task_id]
        if task.total is None:
            # Setup phases have no object count: finish as 1/1.
            self._progress.update(task_id, total=1, completed=1)
        else:
            self._progress.update(task_id, completed=task.total)
        if detail is not None:
            self._progress.update(task_id, detail=detail)

    def phase_error(self, phase: str, error: BaseException) -> None:
        task_id = self._task_ids.get(phase)
        if task_id is None:
            task_id = self._progress.add_task("", total=None, copied="", detail="")
            self._task_ids[phase] = task_id
        message = str(error) or type(error).__name__
        if len(message) > _MAX_ERROR_WIDTH:
            message = message[: _MAX_ERROR_WIDTH - 3] + "..."
        self._progress.update(
            task_id,
            description=f"[red]✗ {phase}[/red]",
            detail=f"[red]{escape(message)}[/red]",
        )
        self._progress.stop_task(task_id)
