import argparse
import asyncio
import logging
import sys

from rich.console import Console
from rich.table import Table

from ask_stream.clients import create_client
from ask_stream.core import QueryOrchestrator
from ask_stream.exceptions import AskStreamError
from ask_stream.models.query import QueryResult
from ask_stream.ui.status_line import StatusLine
from ask_stream.utils.config import Config, SUPPORTED_PROVIDERS
from ask_stream.utils.console import console, print_error

logger = logging.getLogger(__name__)


def parse_arguments(config_obj: Config, argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ask an LLM a question and stream the answer to the terminal")
    parser.add_argument("question", nargs="*", help="Your question for the LLM model")
    parser.add_argument("-m", "--model", type=str, default=None, help=f"Model alias defined in {config_obj.MODELS_CONFIG_PATH}. Supports partial matching. (Default: {config_obj.DEFAULT_MODEL_ALIAS})")
    parser.add_argument("--list-models", action="store_true", help="List available model aliases and exit.")
    parser.add_argument("--plain", action="store_true", help="Plain output without in-place status updates")
    parser.add_argument("--no-delay", action="store_true", help="Skip the connecting/preparing pauses")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging output.")
    return parser.parse_args(argv)


def configure_logging(debug: bool):
    if not debug:
        return
    logging.basicConfig(level=logging.DEBUG,
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def list_models(config_obj: Config):
    table = Table(title="Model aliases", show_header=True, header_style="bold magenta")
    table.add_column("Alias", style="cyan")
    table.add_column("Type")
    table.add_column("Model ID")
    for alias in config_obj.get_model_options():
        model_def = config_obj.get_model_definition(alias)
        model_type = model_def.get("type", "unknown")
        type_display = model_type if model_type in SUPPORTED_PROVIDERS else f"[red]{model_type} (unsupported)[/red]"
        marker = " [green](default)[/green]" if alias == config_obj.DEFAULT_MODEL_ALIAS else ""
        table.add_row(f"{alias}{marker}", type_display, model_def.get("model_id", ""))
    console.print(table)


def read_question(args: argparse.Namespace) -> str:
    if args.question:
        return " ".join(args.question)
    return console.input("[bold blue]Ask:[/bold blue] ")


async def run_query(question: str, config_obj: Config, model_alias: str | None, out: Console) -> QueryResult:
    client = create_client(config_obj, model_alias)
    orchestrator = QueryOrchestrator(client, config_obj, out)
    status_line = StatusLine(out, plain=config_obj.PLAIN_OUTPUT)
    return await orchestrator.process_query(question, status_line)


def main(argv: list[str] | None = None):
    try:
        config_obj = Config()
    except Exception as e:
        # Pydantic validation errors from env/.env values
        console.print(f"[bold red]Error initializing configuration:[/bold red] {e}")
        sys.exit(1)

    args = parse_arguments(config_obj, argv)
    configure_logging(args.debug)
    config_obj.VERBOSE = args.verbose or config_obj.VERBOSE
    config_obj.PLAIN_OUTPUT = args.plain or config_obj.PLAIN_OUTPUT
    if args.no_delay:
        config_obj.CONNECT_DELAY = 0
        config_obj.PREPARE_DELAY = 0

    if args.list_models:
        list_models(config_obj)
        sys.exit(0)

    try:
        question = read_question(args)
        if not question.strip():
            console.print("[yellow]No question given.[/yellow]")
            sys.exit(1)
        result = asyncio.run(run_query(question, config_obj, args.model, console))
    except KeyboardInterrupt:
        console.print("\n[bold yellow]Interrupted![/bold yellow]")
        sys.exit(130)
    except AskStreamError as e:
        print_error(console, str(e))
        if config_obj.VERBOSE:
            console.print_exception()
        sys.exit(1)

    if config_obj.VERBOSE:
        console.print(f"[dim]Model: {result.model}, {result.stats} in {result.elapsed:.2f}s[/dim]")
    sys.exit(0)
