"""Main CLI interface for cms-publish."""

import logging
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from cms_publish import __version__
from cms_publish.config import Settings, get_settings
from cms_publish.core import (
    HistoryReader,
    PublishOrchestrator,
    RepositoryBinding,
    RollbackOrchestrator,
)
from cms_publish.models import OperationResult, PublishRequest

console = Console()


def _setup_logging(level: str) -> None:
    package_logger = logging.getLogger("cms_publish")
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False)
        )


def _print_result(result: OperationResult) -> None:
    """Show an operation result and exit non-zero when it failed."""
    if result.success:
        console.print(f"[green]✅ {escape(result.message)}[/green]")
        return
    console.print(f"[red]Error: {escape(result.message)}[/red]")
    if result.error:
        console.print(f"[red]{escape(result.error)}[/red]")
    raise click.Abort()


@click.group()
@click.version_option(__version__)
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(file_okay=False),
    default=None,
    help="Path to the content repository (default: REPO_PATH or current directory)",
)
@click.option("--log-level", default=None, help="Logging level (default: LOG_LEVEL)")
@click.pass_context
def main(ctx: click.Context, repo_path: Optional[str], log_level: Optional[str]):
    """cms-publish - commit, push and roll back published content."""
    settings: Settings = get_settings()
    if repo_path is not None:
        settings = settings.model_copy(update={"repo_path": Path(repo_path)})
    _setup_logging(log_level or settings.log_level)
    ctx.obj = RepositoryBinding(settings)


@main.command()
@click.pass_obj
def init(binding: RepositoryBinding):
    """Initialize the content repository and its remote."""
    result = binding.ensure_initialized()
    if result.success:
        binding.prepare()
    _print_result(result)


@main.command()
@click.option("-m", "--message", required=True, help="Commit message")
@click.option("--author", required=True, help="Who approved the change")
@click.pass_obj
def publish(binding: RepositoryBinding, message: str, author: str):
    """Commit the content paths and push them."""
    try:
        request = PublishRequest(message=message, author=author)
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors())
        raise click.UsageError(f"Missing required fields: {fields}") from e

    _print_result(PublishOrchestrator(binding).commit_and_push(request))


@main.command()
@click.pass_obj
def rollback(binding: RepositoryBinding):
    """Revert the most recent commit and push the revert."""
    _print_result(RollbackOrchestrator(binding).rollback())


@main.command()
@click.pass_obj
def status(binding: RepositoryBinding):
    """Show the working tree status."""
    tree_status = HistoryReader(binding).get_status()

    console.print(f"[bold]Repository:[/bold] {binding.path}")
    if tree_status.error:
        console.print(f"[yellow]⚠️  {escape(tree_status.error)}[/yellow]")
        return
    if tree_status.clean:
        console.print("[green]Working tree clean[/green]")
        return

    table = Table(title="Changes")
    table.add_column("State", style="cyan")
    table.add_column("Path")
    for state, paths in (
        ("staged", tree_status.staged),
        ("modified", tree_status.modified),
        ("created", tree_status.created),
        ("deleted", tree_status.deleted),
        ("untracked", tree_status.not_added),
    ):
        for path in paths:
            table.add_row(state, escape(path))
    console.print(table)


@main.command()
@click.option("--limit", type=int, default=None, help="Number of commits to show")
@click.pass_obj
def log(binding: RepositoryBinding, limit: Optional[int]):
    """Show recent commits."""
    if limit is None:
        limit = binding.settings.history_limit
    history = HistoryReader(binding).get_history(limit)
    if not history:
        console.print("[yellow]No commits yet[/yellow]")
        return

    table = Table(title="History")
    table.add_column("Commit", style="yellow")
    table.add_column("Date")
    table.add_column("Author")
    table.add_column("Message")
    for record in history:
        table.add_row(
            record.hash[:8],
            record.date.strftime("%Y-%m-%d %H:%M"),
            escape(record.author_name),
            escape(record.message),
        )
    console.print(table)


if __name__ == "__main__":
    main()
