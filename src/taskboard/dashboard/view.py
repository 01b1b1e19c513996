# src/taskboard/dashboard/view.py

from __future__ import annotations

"""
Dashboard: read-only statistics summary.

Fetched once on load. No refresh, no polling, no mutation path.
"""

import io
import logging

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.errors import TransportError, describe_error
from ..core.ports import TaskApi
from ..tasks.task_models import Statistics

logger = logging.getLogger(__name__)

STATS_ERROR_DEFAULT = "Failed to fetch stats"


def _num(value: float) -> str:
    # 50.0 -> "50", 2.5 -> "2.5"
    return f"{value:g}"


class DashboardView:
    def __init__(self, api: TaskApi) -> None:
        self.api = api
        self.stats: Statistics | None = None
        self.error: str | None = None
        self._requested = False

    @property
    def loaded(self) -> bool:
        return self.stats is not None or self.error is not None

    async def load(self) -> Statistics | None:
        """Fetch statistics on first call; later calls return what the first got."""
        if self._requested:
            return self.stats
        self._requested = True
        try:
            self.stats = await self.api.get_statistics()
        except TransportError as exc:
            logger.warning("Error fetching statistics: %s", exc)
            self.error = describe_error(exc, STATS_ERROR_DEFAULT)
        return self.stats

    def render(self, *, width: int = 100) -> str:
        if self.error is not None:
            return self.error
        if self.stats is None:
            return ""

        stats = self.stats
        console = Console(record=True, width=width, file=io.StringIO())
        console.print("[bold]Dashboard[/bold]")

        summary = Table(show_header=False, box=None)
        summary.add_row("[bold]Total:[/bold]", str(stats.total_tasks))
        summary.add_row("[bold]Completed:[/bold]", f"{_num(stats.completed_percentage)}%")
        summary.add_row("[bold]Pending:[/bold]", f"{_num(stats.pending_percentage)}%")
        summary.add_row("[bold]Avg Time:[/bold]", f"{_num(stats.average_completion_time)} hrs")
        console.print(summary)

        pending = Table(title="Pending Tasks", show_header=True)
        for header in ("Priority", "Pending", "Time Lapsed", "Time to Finish"):
            pending.add_column(header, justify="center")
        for row in stats.pending_summary:
            pending.add_row(
                escape(str(row.priority)),
                str(row.pending_tasks),
                _num(row.time_lapsed),
                _num(row.balance_time),
            )
        console.print(pending)

        return console.export_text()
