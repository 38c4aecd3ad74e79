"""Command line interface for semtag.

Global options apply to every command and override the configuration file;
each can also be set through its ``SEMTAG_*`` environment variable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.markup import escape

from semtag import __version__
from semtag.config import SemtagConfig, apply_overrides, load_config
from semtag.core.version import BumpType
from semtag.exceptions import ConfigError
from semtag.log import configure_logging
from semtag.vcs.credentials import PushStrategy

app = typer.Typer(
    name="semtag",
    help="A tool to help you manage versions and changelogs.",
    no_args_is_help=True,
    pretty_exceptions_enable=False,
)
bump_app = typer.Typer(
    help=(
        "Bump the current version number, major, minor or patch. "
        "Concurrent bumps on the same repository are not coordinated."
    ),
    no_args_is_help=True,
)
changelog_app = typer.Typer(help="Manipulate the changelog.", no_args_is_help=True)
app.add_typer(bump_app, name="bump")
app.add_typer(changelog_app, name="changelog")

console = Console()
err_console = Console(stderr=True)


@dataclass
class GlobalOptions:
    """Values of the global options, kept on the typer context."""

    config_path: Path | None = None
    overrides: dict[str, Any] = field(default_factory=dict)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"semtag {__version__}")
        raise typer.Exit()


def load_settings(ctx: typer.Context, **overrides: Any) -> SemtagConfig:
    """Resolve the configuration for a command and set up logging."""
    options: GlobalOptions = ctx.obj or GlobalOptions()
    merged = {**options.overrides, **overrides}

    try:
        config = load_config(options.config_path, search_from=merged.get("repo_path"))
        config = apply_overrides(config, merged)
    except ConfigError as e:
        err_console.print(f"[red]Error loading config:[/] {escape(str(e))}")
        raise SystemExit(1) from e

    configure_logging(config.log_level, console=err_console)
    return config


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_level: Annotated[
        str | None,
        typer.Option(
            envvar="SEMTAG_LOG_LEVEL",
            help="Log level: debug, info, warning|warn, error, fatal or panic.",
        ),
    ] = None,
    repo_path: Annotated[
        Path | None,
        typer.Option(envvar="SEMTAG_REPO_PATH", help="Path to the repository."),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(envvar="SEMTAG_CONFIG", help="Path to the configuration file."),
    ] = None,
    username: Annotated[
        str | None,
        typer.Option(envvar="SEMTAG_USER_NAME", help="User name used for the git commands."),
    ] = None,
    email: Annotated[
        str | None,
        typer.Option(envvar="SEMTAG_USER_EMAIL", help="User email used for the git commands."),
    ] = None,
    push_strategy: Annotated[
        PushStrategy | None,
        typer.Option(envvar="SEMTAG_PUSH_STRATEGY", help="Push strategy."),
    ] = None,
    push_username: Annotated[
        str | None,
        typer.Option(
            envvar="SEMTAG_PUSH_USERNAME", help="Push username, ex. [git]@mydomain.com."
        ),
    ] = None,
    push_public_key: Annotated[
        Path | None,
        typer.Option(
            envvar="SEMTAG_PUSH_PUBLIC_KEY", help="Public key selecting the ssh-agent identity."
        ),
    ] = None,
    push_private_key: Annotated[
        Path | None,
        typer.Option(envvar="SEMTAG_PUSH_PRIVATE_KEY", help="Path to the private key."),
    ] = None,
    push_passphrase: Annotated[
        str | None,
        typer.Option(
            envvar="SEMTAG_PUSH_PASSPHRASE",
            help="Passphrase for the private key.",
            show_default=False,
        ),
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = False,
) -> None:
    """Manage semantic version tags and changelogs."""
    ctx.obj = GlobalOptions(
        config_path=config,
        overrides={
            "log_level": log_level,
            "repo_path": repo_path,
            "user.name": username,
            "user.email": email,
            "push.strategy": push_strategy,
            "push.username": push_username,
            "push.public_key": push_public_key,
            "push.private_key": push_private_key,
            "push.passphrase": push_passphrase,
        },
    )


def _bump(ctx: typer.Context, bump_type: BumpType, dry_run: bool) -> None:
    from semtag.cli.commands.bump import run_bump

    run_bump(load_settings(ctx), bump_type, dry_run, console, err_console)


DryRunOption = Annotated[
    bool,
    typer.Option("--dry-run", help="Show the next version without tagging or pushing."),
]


@bump_app.command("major")
def bump_major(ctx: typer.Context, dry_run: DryRunOption = False) -> None:
    """Major version bump."""
    _bump(ctx, BumpType.MAJOR, dry_run)


@bump_app.command("minor")
def bump_minor(ctx: typer.Context, dry_run: DryRunOption = False) -> None:
    """Minor version bump."""
    _bump(ctx, BumpType.MINOR, dry_run)


@bump_app.command("patch")
def bump_patch(ctx: typer.Context, dry_run: DryRunOption = False) -> None:
    """Patch version bump."""
    _bump(ctx, BumpType.PATCH, dry_run)


@changelog_app.command("generate")
def changelog_generate(
    ctx: typer.Context,
    app_name: Annotated[
        str | None,
        typer.Option(envvar="SEMTAG_APP_NAME", help="The application name."),
    ] = None,
    tag: Annotated[
        str | None,
        typer.Option(envvar="SEMTAG_APP_TAG", help="Generate the changelog from the given tag."),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(envvar="SEMTAG_OUTPUT_FILE", help="Output file or directory path."),
    ] = None,
    template: Annotated[
        Path | None,
        typer.Option(envvar="SEMTAG_TEMPLATE", help="Custom Mako changelog template."),
    ] = None,
) -> None:
    """Generate the changelog."""
    from semtag.cli.commands.changelog import run_generate

    config = load_settings(
        ctx,
        **{
            "changelog.app_name": app_name,
            "changelog.output": output,
            "changelog.template": template,
        },
    )
    run_generate(config, tag, console, err_console)


def main() -> None:
    app()
