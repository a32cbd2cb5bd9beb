"""CLI interface for hookdeploy."""

from __future__ import annotations

import logging
import sys
from typing import NoReturn

import click
from rich.console import Console
from rich.table import Table

from hookdeploy import __version__
from hookdeploy.config import SOURCE_DIR_ENV_VAR, resolve_source_dir
from hookdeploy.deployer import deploy
from hookdeploy.errors import DeployError, DeployFailed, ExitCode
from hookdeploy.models import DeploymentRequest, HookOutcome, Platform
from hookdeploy.resolver import resolve_target

console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger("hookdeploy.cli")

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def select_platform(gitlab: bool, gitolite: bool, bitbucket: bool) -> Platform:
    """Map the mutually exclusive platform flags to a Platform."""
    selected = [
        platform
        for platform, flag in (
            (Platform.GITLAB, gitlab),
            (Platform.GITOLITE, gitolite),
            (Platform.BITBUCKET, bitbucket),
        )
        if flag
    ]
    if len(selected) > 1:
        raise click.UsageError("Options -g, -l and -b are mutually exclusive")
    return selected[0] if selected else Platform.PLAIN


def render_outcomes(outcomes: list[HookOutcome]) -> Table:
    """Build a summary table of deployment steps."""
    table = Table(title="Deployed hooks")
    table.add_column("Hook", style="cyan")
    table.add_column("Mode")
    table.add_column("Destination")
    table.add_column("Status")

    for outcome in outcomes:
        status = "[green]✓ deployed[/green]" if outcome.ok else "[red]✗ failed[/red]"
        table.add_row(
            outcome.hook.value,
            outcome.mode.value,
            str(outcome.destination),
            status,
        )
    return table


def abort(ctx: click.Context, error: DeployError, show_help: bool = True) -> NoReturn:
    """Report an error to the user and exit with its code."""
    err_console.print(f"[red]Error:[/red] {error}")
    if show_help:
        click.echo(ctx.get_help(), err=True)
    sys.exit(int(error.exit_code))


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option("--repo", "-d", "repo", default="", help="Target repository path")
@click.option("--all", "-a", "install_all", is_flag=True, help="Install pre-commit and pre-receive")
@click.option("--commit", "-c", is_flag=True, help="Install pre-commit")
@click.option("--receive", "-r", is_flag=True, help="Install pre-receive")
@click.option("--update", "-u", is_flag=True, help="Install post-update")
@click.option("--gitlab", "-g", is_flag=True, help="Target is a GitLab custom_hooks repo")
@click.option("--gitolite", "-l", is_flag=True, help="Target is a Gitolite admin repo (repo-specific hooks)")
@click.option("--bitbucket", "-b", is_flag=True, help="Target is a BitBucket/Stash pre-receive.d repo")
@click.option(
    "--source-dir",
    "-s",
    envvar=SOURCE_DIR_ENV_VAR,
    default=None,
    help=f"Directory holding the hook scripts (default: ${SOURCE_DIR_ENV_VAR} or current directory)",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__)
@click.pass_context
def main(
    ctx: click.Context,
    repo: str,
    install_all: bool,
    commit: bool,
    receive: bool,
    update: bool,
    gitlab: bool,
    gitolite: bool,
    bitbucket: bool,
    source_dir: str | None,
    verbose: bool,
):
    """Deploy git hooks into a repository's hooks directory."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    platform = select_platform(gitlab, gitolite, bitbucket)

    # -a never implies post-update
    request = DeploymentRequest(
        repo_path=repo,
        install_commit=install_all or commit,
        install_receive=install_all or receive,
        install_update=update,
        platform=platform,
    )
    logger.debug(f"Request: {request}")

    try:
        target = resolve_target(request, resolve_source_dir(source_dir))
    except DeployError as e:
        abort(ctx, e)
    except Exception:
        logger.exception(f"Unexpected error while resolving {repo}")
        sys.exit(int(ExitCode.INTERNAL_ERROR))

    console.print(f"Deploying to [cyan]{target.hooks_dir}[/cyan] ({target.platform.value})")

    outcomes = deploy(target)
    console.print(render_outcomes(outcomes))

    failures = [outcome for outcome in outcomes if not outcome.ok]
    if failures:
        first = failures[0]
        abort(ctx, DeployFailed(first.hook, first.error or ""), show_help=False)

    console.print(f"[green]✓[/green] Deployed {len(outcomes)} hook(s)")


if __name__ == "__main__":
    main()
