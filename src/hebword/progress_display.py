"""
Rich-based live progress panel for dictionary builds.

The panel is drawn on stderr so it never mixes with data written to stdout.
"""

import time
from typing import Any, Dict, Optional

from rich import box
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text


class ProgressDisplay:
    """
    Context manager showing a panel of counters that updates in place.

    Usage:
        with ProgressDisplay("Reading lexicon") as progress:
            for line_num, line in enumerate(f, 1):
                progress.update(Lines=line_num, Words=len(words))
    """

    def __init__(self, title: str = "Progress", update_interval: int = 1000,
                 console: Optional[Console] = None):
        self.title = title
        self.update_interval = update_interval
        self.console = console or Console(stderr=True)

        self.metrics: Dict[str, Any] = {}
        self.live: Optional[Live] = None
        self.start_time = 0.0
        self.updates = 0

    def __enter__(self):
        self.start_time = time.time()
        self.live = Live(self._render(), console=self.console, refresh_per_second=4)
        self.live.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.live:
            self.live.update(self._render())
            self.live.__exit__(exc_type, exc_val, exc_tb)
        return False

    def update(self, **metrics):
        """Record new counter values; redraw every update_interval calls."""
        self.metrics.update(metrics)
        self.updates += 1
        if self.live and self.updates % self.update_interval == 0:
            self.live.update(self._render())

    def _render(self) -> Panel:
        grid = Table.grid(padding=(0, 2))
        grid.add_column(justify="left", no_wrap=True)
        grid.add_column(justify="right", no_wrap=True)

        for key, value in self.metrics.items():
            grid.add_row(Text(f"{key}:", style="bold grey50"),
                         Text(_format(value), style="bright_cyan"))

        elapsed = time.time() - self.start_time if self.start_time else 0.0
        minutes, seconds = divmod(int(elapsed), 60)
        grid.add_row(Text("Elapsed:", style="bold grey50"),
                     Text(f"{minutes:02d}:{seconds:02d}", style="bright_cyan"))

        return Panel(grid, title=self.title, box=box.SIMPLE, border_style="bright_black")


def _format(value: Any) -> str:
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        return f"{value:,.2f}"
    return str(value)
