"""Main CLI application for goimpact."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from goimpact import __version__
from goimpact.analysis.impact_analyzer import ImpactAnalyzer, analyze_repository
from goimpact.analysis.reporter import render
from goimpact.core.config import ImpactConfig
from goimpact.core.constants import ENV_PASSWORD, ENV_TOKEN, ENV_USER
from goimpact.core.exceptions import GoImpactError
from goimpact.tracking.git_tracker import Credentials, GitTracker

# Create the main app
app = typer.Typer(
    name="goimpact",
    help="goimpact - list the Go packages impacted between two commits",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)

RepoOption = Annotated[
    str,
    typer.Option("--repo", "-r", help="Clone URL, file://<path> or local directory"),
]
BranchOption = Annotated[
    Optional[str],
    typer.Option("--branch", "-b", help="Branch to clone"),
]
FromOption = Annotated[str, typer.Option("--from", "-f", help="From commit hash")]
ToOption = Annotated[str, typer.Option("--to", "-t", help="To commit hash")]
UserOption = Annotated[
    Optional[str],
    typer.Option("--user", "-u", envvar=ENV_USER, help="Git user"),
]
PasswordOption = Annotated[
    Optional[str],
    typer.Option("--password", "-p", envvar=ENV_PASSWORD, help="Git password"),
]
TokenOption = Annotated[
    Optional[str],
    typer.Option("--token", envvar=ENV_TOKEN, help="Git token (takes precedence over user/password)"),
]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Config file (defaults to ./.goimpact.yaml)"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Log progress to stderr"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"goimpact version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """goimpact - list the Go packages impacted between two commits."""
    pass


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _load_config(path: Path | None) -> ImpactConfig:
    if path is None:
        return ImpactConfig.discover()
    if not path.exists():
        raise typer.BadParameter(f"Config file {path} does not exist", param_hint="--config")
    return ImpactConfig.load(path)


@app.command()
def impacted(
    from_ref: FromOption,
    to_ref: ToOption,
    repo: RepoOption = ".",
    branch: BranchOption = None,
    user: UserOption = None,
    password: PasswordOption = None,
    token: TokenOption = None,
    explain: Annotated[
        bool,
        typer.Option("--explain", "-e", help="Explain why a package is needed"),
    ] = False,
    output_format: Annotated[
        str,
        typer.Option("--format", help="Output format: text or json"),
    ] = "text",
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """List the packages impacted by the change between two commits."""
    if output_format not in ("text", "json"):
        raise typer.BadParameter("must be 'text' or 'json'", param_hint="--format")
    _configure_logging(verbose)

    try:
        config = _load_config(config_path)
        result = analyze_repository(
            repo,
            from_ref,
            to_ref,
            branch=branch,
            credentials=Credentials(user=user, password=password, token=token),
            config=config,
            explain=explain,
        )
    except GoImpactError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    report = render(result, output_format, explain)
    if report:
        typer.echo(report)


@app.command()
def changes(
    from_ref: FromOption,
    to_ref: ToOption,
    repo: RepoOption = ".",
    branch: BranchOption = None,
    user: UserOption = None,
    password: PasswordOption = None,
    token: TokenOption = None,
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Show the raw path changes and dependency changes between two commits."""
    _configure_logging(verbose)

    try:
        config = _load_config(config_path)
        credentials = Credentials(user=user, password=password, token=token)
        with GitTracker.open(repo, branch, credentials, config.ambiguous_prefix) as tracker:
            analyzer = ImpactAnalyzer(
                tracker.snapshot(from_ref), tracker.snapshot(to_ref), config
            )
            path_changes = analyzer.changes()
            dependencies = analyzer.changed_dependencies()
    except GoImpactError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not path_changes and not dependencies:
        console.print("[dim]No changes[/dim]")
        return

    if path_changes:
        table = Table(title="Changed paths")
        table.add_column("Change", style="cyan")
        table.add_column("Path")
        for change in path_changes:
            table.add_row(change.kind.value, change.path)
        console.print(table)

    if dependencies:
        table = Table(title="Changed dependencies")
        table.add_column("Dependency", style="yellow")
        for dependency in dependencies:
            table.add_row(dependency)
        console.print(table)


if __name__ == "__main__":
    app()
