"""CLI interface for Family Tree."""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from .interpreter import CommandInterpreter, CommandResult

app = typer.Typer(
    name="family-tree",
    help="In-memory family tree with pedigree queries",
    add_completion=False,
)
console = Console(highlight=False, soft_wrap=True)


def get_config():
    """Load configuration from environment (and a local .env file)."""
    from dotenv import load_dotenv

    from .config import FamilyTreeConfig

    load_dotenv()
    return FamilyTreeConfig()


def build_interpreter(config) -> CommandInterpreter:
    from .graph.registry import FamilyRegistry
    from .ids import IdGenerator
    from .models.factory import PersonFactory
    from .render import get_renderer

    id_generator = IdGenerator(prefix=config.id_prefix, width=config.id_width)
    factory = PersonFactory(
        id_generator,
        reference_year=config.reference_year,
        adult_age=config.adult_age,
    )
    try:
        renderer = get_renderer(config.renderer)
    except ValueError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    return CommandInterpreter(FamilyRegistry(factory=factory, renderer=renderer))


@app.callback()
def main(
    log_level: str = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
):
    """Configure logging before any command runs."""
    from .logging import configure_logging

    level = (log_level or get_config().log_level).upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        console.print(f"[red]Invalid log level: {escape(level)}[/red]")
        raise typer.Exit(1)
    configure_logging(level)


@app.command()
def shell():
    """Start an interactive session (type HELP for commands, EXIT to quit)."""
    interpreter = build_interpreter(get_config())

    console.print("Family Tree Application")
    console.print("Type 'HELP' for commands, 'EXIT' to quit")
    console.print()

    while True:
        try:
            line = console.input("> ")
        except EOFError:
            break

        result = interpreter.execute(line)
        _display_result(result)
        if result.exit:
            break


@app.command()
def run(
    script: Path = typer.Argument(..., help="File with one command per line"),
    stop_on_error: bool = typer.Option(False, "--stop-on-error", help="Exit 1 on the first failing command"),
    echo: bool = typer.Option(False, "--echo", "-e", help="Print each command before its output"),
):
    """Execute a command script."""
    if not script.exists():
        console.print(f"[red]Error: File not found: {escape(str(script))}[/red]")
        raise typer.Exit(1)

    interpreter = build_interpreter(get_config())

    for line in script.read_text(encoding="utf-8").splitlines():
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        if echo:
            console.print(f"> {line.strip()}", markup=False)

        result = interpreter.execute(line)
        _display_result(result)

        if stop_on_error and not result.ok:
            raise typer.Exit(1)
        if result.exit:
            break


def _display_result(result: CommandResult):
    """Print one command's output."""
    if not result.output:
        return
    if result.ok:
        console.print(result.output, markup=False)
    else:
        console.print(f"[red]{escape(result.output)}[/red]")


if __name__ == "__main__":
    app()
