import click
import sys
import json
from pathlib import Path
from time_on_task.config.logging_config import setup_logging
from time_on_task.config.settings import settings
from time_on_task.services.calculator import TimeOnTaskCalculator
from time_on_task.services.database import DatabaseManager
from time_on_task.services.display import TerminalDisplay
from time_on_task.services.loader import load_events
from rich.console import Console
import logging
import asyncio
import uvicorn

# Set up logging
logger = logging.getLogger(__name__)

# Initialize console
console = Console()

def _calculator(ctx: click.Context) -> TimeOnTaskCalculator:
    return TimeOnTaskCalculator(DatabaseManager(ctx.obj["db_path"]))

def _emit_json(payload, diagnostics=None):
    if diagnostics is not None:
        payload = {"results": payload, "diagnostics": diagnostics}
    click.echo(json.dumps(payload, indent=2))

@click.group()
@click.option('--db-path', default=None, help='SQLite database file (defaults to DB_NAME)')
@click.option('--debug', is_flag=True, help='Enable debug output')
@click.pass_context
def cli(ctx, db_path, debug):
    """Time-on-task reports from the student event log"""
    # Set up logging before anything else
    setup_logging("DEBUG" if debug else None)
    ctx.ensure_object(dict)
    ctx.obj["db_path"] = db_path

@cli.command()
@click.option('--json', 'as_json', is_flag=True, help='Print records as JSON')
@click.option('--diagnostics', is_flag=True, help='Include anomaly counts')
@click.pass_context
def students(ctx, as_json, diagnostics):
    """Compute time on task for each student"""
    try:
        result = _calculator(ctx).calculate_per_student()
        if as_json:
            _emit_json(result.to_output(), result.diagnostics.to_dict() if diagnostics else None)
        else:
            TerminalDisplay(console).show_time_on_task(result, "User Time on Task", diagnostics)
    except Exception as e:
        logger.error(f"Failed to calculate student time on task: {e}")
        console.print(f"[red]Error calculating time on task: {e}[/red]")
        sys.exit(1)

@cli.command()
@click.option('--json', 'as_json', is_flag=True, help='Print records as JSON')
@click.option('--diagnostics', is_flag=True, help='Include anomaly counts')
@click.pass_context
def classes(ctx, as_json, diagnostics):
    """Compute time on task for each class"""
    try:
        result = _calculator(ctx).calculate_per_class()
        if as_json:
            _emit_json(result.to_output(), result.diagnostics.to_dict() if diagnostics else None)
        else:
            TerminalDisplay(console).show_time_on_task(result, "Class Time on Task", diagnostics)
    except Exception as e:
        logger.error(f"Failed to calculate class time on task: {e}")
        console.print(f"[red]Error calculating time on task per class: {e}[/red]")
        sys.exit(1)

@cli.command()
@click.option('--json', 'as_json', is_flag=True, help='Print records as JSON')
@click.option('--diagnostics', is_flag=True, help='Include anomaly counts')
@click.pass_context
def combined(ctx, as_json, diagnostics):
    """Compute time on task for students and classes together"""
    try:
        result = asyncio.run(_calculator(ctx).calculate_combined())
        if as_json:
            _emit_json(result.to_output(), {
                "userTimeOnTask": result.students.diagnostics.to_dict(),
                "classTimeOnTask": result.classes.diagnostics.to_dict()
            } if diagnostics else None)
        else:
            TerminalDisplay(console).show_combined(result, diagnostics)
    except Exception as e:
        logger.error(f"Failed to calculate combined time on task: {e}")
        console.print(f"[red]Error calculating time on task: {e}[/red]")
        sys.exit(1)

@cli.group()
def db():
    """Database management commands"""
    pass

@db.command()
@click.argument('event_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def load(ctx, event_file: Path):
    """Append events from a JSON or CSV file to the event log"""
    try:
        events = load_events(event_file)
        stored = DatabaseManager(ctx.obj["db_path"]).store_events(events)
        console.print(f"[green]Loaded {stored} events from {event_file.name}[/green]")
    except Exception as e:
        logger.error(f"Failed to load events: {e}")
        console.print(f"[red]Error loading events: {e}[/red]")
        sys.exit(1)

@db.command()
@click.pass_context
def stats(ctx):
    """Show event log statistics"""
    try:
        stats = DatabaseManager(ctx.obj["db_path"]).get_database_stats()
        TerminalDisplay(console).show_database_stats(stats)
    except Exception as e:
        logger.error(f"Failed to get database stats: {e}")
        console.print(f"[red]Error getting database stats: {e}[/red]")
        sys.exit(1)

@cli.command()
@click.option('--host', default=settings.WEB_HOST, help='Host to bind to')
@click.option('--port', default=settings.WEB_PORT, help='Port to bind to')
@click.option('--reload', is_flag=True, help='Enable auto-reload')
def web(host: str, port: int, reload: bool):
    """Serve the time-on-task JSON API"""
    click.echo(f"Starting web interface on http://{host}:{port}")
    uvicorn.run(
        "time_on_task.web.app:app",
        host=host,
        port=port,
        reload=reload
    )

if __name__ == '__main__':
    cli()
