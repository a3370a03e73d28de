"""
Book Builder CLI Application.

Main entry point for the Book Builder command-line interface: loads a book
directory and writes its structured dump, checks a book, or shows the
effective configuration.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.book.book import Book
from ..core.book.serialization import DUMP_FORMATS, dump
from ..exceptions.config_exceptions import ConfigurationError
from ..exceptions.system_exceptions import BookBuilderError
from ..utils.config import ConfigManager
from ..utils.logging_config import setup_logging

# Command output goes to stdout, logs and errors to stderr.
console = Console()
error_console = Console(stderr=True)

app = typer.Typer(
    name="book-builder",
    help="Load a recipe book written as Markdown/YAML files into structured data",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

# Global state
_config_manager: Optional[ConfigManager] = None
_logger: Optional[logging.Logger] = None


def get_config_manager(config_path: Optional[str] = None) -> ConfigManager:
    """
    Get or create the global configuration manager.

    Args:
        config_path: Optional path to configuration file

    Returns:
        ConfigManager instance with its configuration loaded

    Raises:
        typer.Exit: If configuration loading fails
    """
    global _config_manager

    if _config_manager is None or config_path:
        try:
            manager = ConfigManager(config_file=config_path, load_env=True)
            manager.load_config()
        except ConfigurationError as e:
            error_console.print("[red]Configuration Error:[/red]", escape(str(e)), highlight=False)
            raise typer.Exit(1)
        _config_manager = manager

    return _config_manager


def get_logger() -> logging.Logger:
    """Get the global logger instance."""
    global _logger
    if _logger is None:
        _logger = setup_logging(console=error_console)
    return _logger


def handle_cli_error(error: Exception) -> None:
    """
    Print an error in red on stderr.

    Args:
        error: The exception that occurred
    """
    logger = get_logger()

    if isinstance(error, ConfigurationError):
        error_console.print("[red]Configuration Error:[/red]", escape(str(error)), highlight=False)
        logger.debug("Configuration error details", exc_info=True)
    elif isinstance(error, BookBuilderError):
        error_console.print("[red]Error loading book:[/red]", escape(str(error)), highlight=False)
        logger.debug("Load error details", exc_info=True)
    else:
        error_console.print("[red]Error:[/red]", escape(str(error)), highlight=False)
        logger.debug("Unexpected error details", exc_info=True)


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config-path",
        "-c",
        help="Path to configuration file (default: bookbuilder.config.json)",
        metavar="PATH",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging (DEBUG level)",
    ),
) -> None:
    """
    Book Builder CLI - structured extraction for a Markdown recipe book.

    Common workflows:
    • Dump a book as YAML: book-builder dump path/to/book
    • Dump as JSON to a file: book-builder dump path/to/book --format json -o book.json
    • Check a book loads: book-builder check path/to/book
    """
    global _logger, _config_manager

    _config_manager = None
    config_manager = get_config_manager(config_path)
    _logger = setup_logging(
        level=config_manager.get("logging.level", "WARNING"),
        verbose=verbose,
        console=error_console,
    )

    ctx.obj = {
        "config_path": config_path,
        "verbose": verbose,
        "config_manager": config_manager,
        "logger": _logger,
    }


def _load_book(book_dir: Path) -> Book:
    config_manager = get_config_manager()
    try:
        return Book.load(book_dir, config_manager.layout)
    except BookBuilderError as e:
        handle_cli_error(e)
        raise typer.Exit(1)


@app.command("dump")
def dump_command(
    book_dir: Path = typer.Argument(..., help="Book directory", metavar="BOOK_DIR"),
    output_format: Optional[str] = typer.Option(
        None,
        "--format",
        "-f",
        help=f"Output format: {' or '.join(DUMP_FORMATS)} (default from configuration)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the dump to a file instead of stdout",
    ),
    no_modified: bool = typer.Option(
        False,
        "--no-modified",
        help="Leave file modification times out of the dump",
    ),
) -> None:
    """Load a book and write its structured dump."""
    config_manager = get_config_manager()
    fmt = (output_format or config_manager.get("dump.format", "yaml")).lower()
    if fmt not in DUMP_FORMATS:
        error_console.print(
            f"[red]Error:[/red] unknown format {fmt!r} (expected one of {', '.join(DUMP_FORMATS)})",
            highlight=False,
        )
        raise typer.Exit(1)

    book = _load_book(book_dir)
    text = dump(
        book,
        fmt=fmt,
        indent=config_manager.get("dump.indent", 2),
        include_modified=not no_modified,
    )

    if output is None:
        typer.echo(text, nl=False)
        return

    try:
        output.write_text(text, encoding="utf-8")
    except OSError as e:
        handle_cli_error(e)
        raise typer.Exit(1)
    error_console.print(f"[green]✓[/green] Wrote {fmt} dump to {output}", highlight=False)


@app.command("check")
def check_command(
    book_dir: Path = typer.Argument(..., help="Book directory", metavar="BOOK_DIR"),
) -> None:
    """Load a book and print a summary of its recipes."""
    book = _load_book(book_dir)

    table = Table(title=escape(book.front_matter.title.to_text()))
    table.add_column("Recipe", style="cyan")
    table.add_column("Name")
    table.add_column("Ingredients", justify="right")
    table.add_column("Modified")

    for key, recipe in book.recipes.items():
        table.add_row(
            key,
            escape(recipe.name.to_text()),
            str(len(recipe.ingredients)),
            _format_modified(recipe.modified),
        )

    console.print(table)
    console.print(f"Recipes: {len(book.recipes)}", highlight=False)
    console.print(f"Book modified: {_format_modified(book.modified)}", highlight=False)


@app.command("config")
def config_command() -> None:
    """Show the effective configuration and its sources."""
    config_manager = get_config_manager()
    summary = config_manager.get_config_summary()

    table = Table(title="Configuration")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    for key, value in summary["values"].items():
        table.add_row(key, escape(str(value)))

    console.print(table)
    console.print(f"Config file: {summary['config_file']}", highlight=False)
    for env_var, key in summary["environment_overrides"].items():
        console.print(f"Override: {env_var} -> {key}", highlight=False)


def _format_modified(value) -> str:
    if value is None:
        return "unknown"
    return value.isoformat()


def cli_main() -> None:
    """
    Main CLI entry point with error handling.

    This function is called by the console script entry point.
    """
    try:
        app()
    except KeyboardInterrupt:
        rprint("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(130)


if __name__ == "__main__":
    cli_main()
