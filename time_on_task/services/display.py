from typing import Dict, Optional
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.text import Text

from time_on_task.models.diagnostics import AggregationDiagnostics

class TerminalDisplay:
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show_time_on_task(self, result, title: str, show_diagnostics: bool = False):
        """Display one dimension's totals as a table"""
        records = result.records
        if not records:
            self.console.print(f"\n[yellow]No {result.profile.name} time on task recorded[/yellow]")
        else:
            table = Table(title=title)
            table.add_column("ID", justify="right", style="cyan")
            table.add_column("Time on Task", justify="left", style="green")
            table.add_column("Seconds", justify="right", style="dim")

            for record in records:
                table.add_row(
                    str(record.id),
                    record.total_time_on_task,
                    f"{record.total_seconds:.1f}"
                )
            self.console.print(table)

        if show_diagnostics:
            self.show_diagnostics(result.diagnostics, title=f"{title} Diagnostics")

    def show_combined(self, combined, show_diagnostics: bool = False):
        self.show_time_on_task(combined.students, "User Time on Task", show_diagnostics)
        self.show_time_on_task(combined.classes, "Class Time on Task", show_diagnostics)

    def show_diagnostics(self, diagnostics: AggregationDiagnostics, title: str = "Diagnostics"):
        """Display anomaly counters absorbed during aggregation"""
        text = Text()
        for name, count in diagnostics.to_dict().items():
            label = name.replace("_", " ").capitalize()
            style = "yellow" if count and name not in ("events_seen", "accepted_sessions") else "dim"
            text.append(f"{label}: ", style="bold")
            text.append(f"{count}\n", style=style)
        self.console.print(Panel(text, title=title, expand=False))

    def show_database_stats(self, stats: Dict):
        """Display event log statistics"""
        table = Table(title="Student Events")
        table.add_column("Action", style="cyan")
        table.add_column("Events", justify="right", style="green")
        for action, count in stats["actions"].items():
            table.add_row(action, f"{count:,}")
        self.console.print(table)

        time_range = stats["client_time_range"]
        overview = (
            f"[yellow]Total Events:[/yellow] {stats['total_events']:,}\n"
            f"[green]Users:[/green] {stats['users']:,}\n"
            f"[green]Classes:[/green] {stats['classes']:,}\n"
            f"[green]Tasks:[/green] {stats['tasks']:,}"
        )
        if time_range["earliest"] is not None:
            overview += (
                f"\n[cyan]Client Time Range:[/cyan] "
                f"{time_range['earliest']:.0f} - {time_range['latest']:.0f}"
            )
        self.console.print(Panel(overview, title="Data Overview"))

        size_text = Text()
        size_text.append("\nDatabase Size: ", style="bold")
        size_text.append(f"{stats['database_size_mb']:.1f}MB", style="green")
        self.console.print(size_text)
