"""
Progress bar handling for playlist-facets using the Rich library.

Only the enrichment run gets a progress bar: fetching the playlist is a
single request. The bar shows the track currently being analyzed and
running counts of outcomes.

Usage:
    from playlist_facets.core.progress import EnrichmentProgressBar

    with EnrichmentProgressBar(total=len(tracks)) as progress:
        for step in iter_enrichment(client, tracks):
            ...
"""

from typing import Optional

from rich import get_console
from rich.console import Console, JustifyMethod, OverflowMethod
from rich.highlighter import Highlighter
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    ProgressColumn,
    Task,
    TaskID,
)
from rich.style import StyleType
from rich.text import Text
from rich.theme import Theme

from playlist_facets.facets.models import StepStatus


PROGRESS_THEME = Theme({
    "bar.back": "grey23",
    "bar.complete": "rgb(255,115,0)",
    "bar.finished": "rgb(114,156,31)",
    "bar.pulse": "rgb(255,115,0)",
    "progress.percentage": "white",
})


class SizedTextColumn(ProgressColumn):
    """
    Text column with a fixed width.

    Text longer than the width is truncated, with an ellipsis when
    overflow="ellipsis".
    """

    def __init__(
        self,
        text_format: str,
        style: StyleType = "none",
        justify: JustifyMethod = "left",
        markup: bool = True,
        highlighter: Optional[Highlighter] = None,
        overflow: Optional[OverflowMethod] = None,
        width: int = 20,
    ) -> None:
        self.text_format = text_format
        self.justify: JustifyMethod = justify
        self.style = style
        self.markup = markup
        self.highlighter = highlighter
        self.overflow: Optional[OverflowMethod] = overflow
        self.width = width
        super().__init__()

    def render(self, task: Task) -> Text:
        """Render the column."""
        _text = self.text_format.format(task=task)
        if self.markup:
            text = Text.from_markup(_text, style=self.style, justify=self.justify)
        else:
            text = Text(_text, style=self.style, justify=self.justify)
        if self.highlighter:
            self.highlighter.highlight(text)

        text.truncate(max_width=self.width, overflow=self.overflow, pad=True)
        return text


class EnrichmentProgressBar:
    """
    Progress bar for the enrichment run.

    Displays:
    - Description ("Analyzing")
    - Current track name
    - Status: ✓ extracted, ∅ no facet data, ✗ failed
    - Progress bar and percentage

    Example:
        Analyzing   晴天            ✓ 45  ∅ 2  ✗ 1   ━━━━━━━━━━━━━━━━  47%

    Supports use as a context manager or manual start()/stop().
    """

    def __init__(
        self,
        total: int,
        description: str = "Analyzing",
        label_width: int = 24,
        status_width: int = 24,
        console: Optional[Console] = None
    ) -> None:
        self.total = total
        self.description = description
        self.completed = 0
        self.extracted = 0
        self.empty = 0
        self.failed = 0
        self.current_label = ""

        self.console = console if console is not None else get_console()

        self.progress = Progress(
            SizedTextColumn(
                "[white]{task.description}",
                overflow="ellipsis",
                width=12,
            ),
            SizedTextColumn(
                "{task.fields[label]}",
                overflow="ellipsis",
                width=label_width,
                style="cyan",
            ),
            SizedTextColumn(
                "{task.fields[status]}",
                width=status_width,
                style="white",
            ),
            BarColumn(bar_width=40, finished_style="green"),
            "[progress.percentage]{task.percentage:>3.0f}%",
            console=self.console,
            transient=False,
            refresh_per_second=10,
        )

        self.task_id: Optional[TaskID] = None
        self._started = False

    def __enter__(self) -> "EnrichmentProgressBar":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()

    def start(self) -> None:
        """Start the progress bar (can be called manually)."""
        if not self._started:
            self.console.push_theme(PROGRESS_THEME)
            self.progress.start()
            self.task_id = self.progress.add_task(
                description=self.description,
                total=self.total,
                label="",
                status=self._get_status_text(),
            )
            self._started = True

    def stop(self) -> None:
        """Stop the progress bar and restore the console theme."""
        if self._started:
            self.progress.stop()
            self.console.pop_theme()
            self._started = False

    def set_current(self, label: str) -> None:
        """Show the name of the track whose metadata is being fetched."""
        self.current_label = label
        self._update_progress()

    def update(self, status: StepStatus) -> None:
        """
        Count one finished track.

        Args:
            status: Outcome of the track (EXTRACTED, NO_FACETS or FAILED).
        """
        self.completed += 1
        if status is StepStatus.EXTRACTED:
            self.extracted += 1
        elif status is StepStatus.NO_FACETS:
            self.empty += 1
        elif status is StepStatus.FAILED:
            self.failed += 1
        self._update_progress()

    def _get_status_text(self) -> str:
        parts = [
            f"[green]✓ {self.extracted}[/green]",
            f"[yellow]∅ {self.empty}[/yellow]",
        ]
        if self.failed > 0:
            parts.append(f"[red]✗ {self.failed}[/red]")
        return "  ".join(parts)

    def _update_progress(self) -> None:
        if self.task_id is not None:
            self.progress.update(
                self.task_id,
                completed=self.completed,
                label=escape(self.current_label),
                status=self._get_status_text(),
            )
