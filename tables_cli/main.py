"""Tables CLI - Main entry point."""

import logging
from typing import Optional, List

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .config import Settings
from .database import DIALECTS
from .errors import TablesError
from .runner import generate as run_generation, write_sources

app = typer.Typer(
    name="tables-cli",
    help="Generate Go structs from relational database schemas",
    add_completion=False,
)

console = Console()


def _load_settings(**overrides) -> Settings:
    """Build settings from the environment, overridden by given CLI options."""
    try:
        return Settings(**{key: value for key, value in overrides.items() if value is not None})
    except ValidationError as e:
        console.print("[red]Invalid configuration:[/red]")
        console.print(str(e), markup=False)
        raise typer.Exit(1)


def _print_error_details(error: TablesError):
    """Print the error code and context of a failed run."""
    report = error.to_dict()
    console.print(f"  code: {report['code']}", markup=False)
    for key, value in report["details"].items():
        console.print(f"  {key}: {value}", markup=False)


@app.command()
def generate(
    db_type: Optional[str] = typer.Option(None, "--type", "-t", help="Database type: pg, duckdb, oracle, sqlite3"),
    host: Optional[str] = typer.Option(None, "--host", help="Database host"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Database port"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="Database user"),
    password: Optional[str] = typer.Option(None, "--password", help="Database password"),
    db_name: Optional[str] = typer.Option(None, "--db", "-d", help="Database name, Oracle service or database file"),
    schema: Optional[str] = typer.Option(None, "--schema", "-s", help="Schema (Oracle: owner) to introspect"),
    socket: Optional[str] = typer.Option(None, "--socket", help="Unix socket directory (PostgreSQL)"),
    ssl_mode: Optional[str] = typer.Option(None, "--sslmode", help="SSL mode (PostgreSQL)"),
    tables: Optional[List[str]] = typer.Option(None, "--table", help="Only this table. Can be specified multiple times."),
    tags: Optional[List[str]] = typer.Option(None, "--tag", help="Active tag generator (db, stbl, json). Can be specified multiple times."),
    naming: Optional[str] = typer.Option(None, "--naming", help="Naming convention: camel or original"),
    null_type: Optional[str] = typer.Option(None, "--null", help="Nullable columns as: sql, native or primitive"),
    package_name: Optional[str] = typer.Option(None, "--package", help="Go package name"),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Prefix for struct names"),
    suffix: Optional[str] = typer.Option(None, "--suffix", help="Suffix for struct names"),
    output_dir: Optional[str] = typer.Option(None, "--output", "-o", help="Directory for generated files"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print extra diagnostics"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print generated code instead of writing files"),
):
    """
    Generate one Go struct per table of a database schema.

    Examples:

        tables-cli generate -t pg -d shop -s public --tag db --tag json

        tables-cli generate -t sqlite3 -d ./shop.db --table customers --dry-run
    """
    settings = _load_settings(
        db_type=db_type,
        host=host,
        port=port,
        user=user,
        password=password,
        db_name=db_name,
        db_schema=schema,
        socket=socket,
        ssl_mode=ssl_mode,
        tables=tables or None,
        tags=tags or None,
        naming=naming,
        null_type=null_type,
        package_name=package_name,
        prefix=prefix,
        suffix=suffix,
        output_dir=output_dir,
        verbose=verbose or None,
    )
    logging.basicConfig(
        level=logging.DEBUG if settings.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = run_generation(settings)
    except TablesError as e:
        console.print(e.message, style="red", markup=False)
        if settings.verbose:
            _print_error_details(e)
        raise typer.Exit(1)
    except ImportError as e:
        console.print(str(e), style="red", markup=False)
        raise typer.Exit(1)

    if not result.structs:
        console.print("[yellow]No tables found in the specified database/schema[/yellow]")
        raise typer.Exit(1)

    if dry_run:
        for source in result.sources.values():
            console.print(source, markup=False, highlight=False, soft_wrap=True)
        return

    written = write_sources(result.sources, settings.output_dir)

    summary = Table(title="Generated Structs")
    summary.add_column("Table", style="cyan")
    summary.add_column("Struct", style="green")
    summary.add_column("Fields", justify="right")
    summary.add_column("File", style="magenta")
    for struct, path in zip(result.structs, written):
        summary.add_row(struct.table, struct.name, str(len(struct.fields)), str(path))
    console.print(summary)
    console.print(f"[bold]Total: {len(result.structs)} structs written to {settings.output_dir}[/bold]")


@app.command()
def config():
    """Show current configuration."""
    settings = _load_settings()
    console.print("[bold]Current Configuration[/bold]")
    console.print(f"  Database type: {settings.db_type}")
    console.print(f"  Host: {settings.socket or settings.host}")
    console.print(f"  Port: {settings.port or 'default'}")
    console.print(f"  User: {settings.user or 'default'}")
    console.print(f"  Password configured: {'Yes' if settings.password else 'No'}")
    console.print(f"  Database: {settings.db_name}")
    console.print(f"  Schema: {settings.db_schema or 'default'}")
    console.print(f"  Tables: {', '.join(settings.tables) or 'All'}")
    console.print(f"  Tags: {', '.join(settings.tags) or 'None'}")
    console.print(f"  Naming: {settings.naming}")
    console.print(f"  Null type: {settings.null_type}")
    console.print(f"  Package: {settings.package_name}")
    console.print(f"  Output directory: {settings.output_dir}")


@app.command()
def dialects():
    """List supported database types."""
    table = Table(title="Supported Databases")
    table.add_column("Type", style="cyan")
    table.add_column("Driver", style="green")
    table.add_column("Default schema", style="yellow")
    for dialect in DIALECTS.values():
        table.add_row(dialect.name, dialect.driver, dialect.introspector.DEFAULT_SCHEMA or "-")
    console.print(table)


if __name__ == "__main__":
    app()
