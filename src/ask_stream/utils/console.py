from datetime import datetime

from rich.console import Console
from rich.markup import escape

from ask_stream.models.query import StreamStats

console = Console()


def print_query_header(out: Console, query: str):
    out.print()
    out.print(f"[blue]📝 Query:[/blue] {escape(query)}", highlight=False, emoji=False)
    out.print("[green]✨ Response:[/green]")
    out.print()


def print_response_summary(out: Console, stats: StreamStats, finished_at: datetime, elapsed: float):
    """Print completion time and totals once a response has streamed."""
    out.print(f"[grey50]⏰ Completed at: {finished_at.strftime('%X')} ({elapsed:.2f}s)[/grey50]", highlight=False)
    out.print(f"[dim]📊 Total: {stats}[/dim]", highlight=False)
    out.print()


def print_error(out: Console, message: str):
    out.print(f"[bold red]Error:[/bold red] {escape(message)}")
