"""Implementation of the 'bump' commands.

Tags HEAD with the next major, minor or patch version and pushes the tag.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape
from rich.panel import Panel

from semtag.core.bump import bump
from semtag.exceptions import SemtagError
from semtag.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from semtag.config import SemtagConfig
    from semtag.core.version import BumpType
    from semtag.vcs import Signature


def resolve_signature(config: SemtagConfig, repo: GitRepository) -> Signature:
    """Use the configured identity, or fall back to the git configuration."""
    return config.user.signature or repo.user_signature()


def run_bump(
    config: SemtagConfig,
    bump_type: BumpType,
    dry_run: bool,
    console: Console,
    err_console: Console,
) -> None:
    """Run a bump command.

    Args:
        config: Resolved configuration
        bump_type: Component to increment
        dry_run: Only show what would be tagged
        console: Console for standard output
        err_console: Console for error output
    """
    try:
        repo = GitRepository(config.repo_path)
        signature = resolve_signature(config, repo)
        result = bump(
            repo,
            bump_type,
            signature=signature,
            push_credentials=config.push.credentials(),
            remote=config.remote,
            tag_prefix=config.tag_prefix,
            dry_run=dry_run,
        )
    except SemtagError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    summary = (
        f"[cyan]{escape(result.previous_tag.name)}[/] → [green]{escape(result.tag_name)}[/]\n"
        f"Codename: [magenta]{escape(result.codename)}[/]\n"
        f"Message: {escape(result.message)}"
    )

    if dry_run:
        console.print(
            Panel(
                f"{summary}\n\n[dim]Run without [cyan]--dry-run[/] to create and push the tag.[/]",
                title="[yellow]Dry Run Preview[/]",
                border_style="yellow",
            )
        )
        return

    console.print(
        Panel(
            f"{summary}\n\nPushed to [cyan]{escape(config.remote)}[/].",
            title="[green]Release Tagged[/]",
            border_style="green",
        )
    )
