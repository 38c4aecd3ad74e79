"""Implementation of the 'changelog generate' command."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.markup import escape

from semtag.core.changelog import generate_changelog, write_changelog
from semtag.exceptions import SemtagError
from semtag.vcs import GitRepository

if TYPE_CHECKING:
    from rich.console import Console

    from semtag.config import SemtagConfig


def run_generate(
    config: SemtagConfig,
    tag: str | None,
    console: Console,
    err_console: Console,
) -> None:
    """Run the changelog generation.

    Args:
        config: Resolved configuration
        tag: Release tag to describe, the latest one when ``None``
        console: Console for standard output
        err_console: Console for error output
    """
    try:
        repo = GitRepository(config.repo_path)
        content = generate_changelog(
            repo,
            app_name=config.changelog.app_name or repo.path.name,
            tag_name=tag,
            template=config.changelog.template,
        )
        output = write_changelog(content, config.effective_changelog_output)
    except (SemtagError, OSError) as e:
        err_console.print(f"[red]Error generating changelog:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    console.print(f"  [green]✓[/] {escape(str(output))} has been successfully created!")
