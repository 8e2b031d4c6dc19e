"""CLI application for the upstream Composer scripts.

Wire it into composer.json::

    "scripts": {
        "pre-update-cmd": "upstream-scripts pre-update",
        "post-update-cmd": "upstream-scripts post-update",
        "upstream-require": "upstream-scripts upstream-require --"
    }
"""

import logging
import os
import shlex
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from core.hooks import ScriptIO, post_update, pre_update, upstream_require
from core.models import HookContext

console = Console()
error_console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def build_context(ctx: typer.Context, arguments: list[str] | None = None) -> HookContext:
    """Create the hook context for the current invocation."""
    working_dir = (ctx.obj or {}).get("working_dir") or Path.cwd()
    return HookContext(
        project_root=Path(working_dir).resolve(),
        io=ScriptIO(console, error_console),
        arguments=list(arguments or []),
        env=dict(os.environ),
    )


def fail(e: Exception) -> None:
    """Report an error and exit with status 1."""
    error_console.print(f"Error: {e}", style="red", markup=False, soft_wrap=True)
    raise typer.Exit(1)


app = typer.Typer(
    name="upstream-scripts",
    help="Composer scripts for a custom Drupal upstream",
    add_completion=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    working_dir: Path | None = typer.Option(
        None, "--working-dir", "-d", help="Project directory containing composer.json"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Composer scripts for a custom Drupal upstream."""
    configure_logging(verbose)
    ctx.obj = {"working_dir": working_dir}


@app.command("pre-update")
def pre_update_command(
    ctx: typer.Context,
    print_env: bool = typer.Option(
        False, "--print-env", help="Print an export line for the pinned root version"
    ),
) -> None:
    """Prepare for composer update (pre-update-cmd)."""
    context = build_context(ctx)

    try:
        pre_update(context)
    except Exception as e:
        fail(e)

    if print_env:
        value = context.env.get("COMPOSER_ROOT_VERSION", "")
        console.print(f"export COMPOSER_ROOT_VERSION={shlex.quote(value)}", markup=False, soft_wrap=True)


@app.command("post-update")
def post_update_command(ctx: typer.Context) -> None:
    """Apply one-time starter configuration (post-update-cmd)."""
    context = build_context(ctx)

    try:
        post_update(context)
    except Exception as e:
        fail(e)


@app.command(
    "upstream-require",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def upstream_require_command(
    ctx: typer.Context,
    packages: list[str] | None = typer.Argument(
        None, help="Packages to add, e.g. drupal/pathauto or drupal/token:^1"
    ),
) -> None:
    """Add dependencies to upstream-configuration/composer.json."""
    context = build_context(ctx, list(packages or []) + list(ctx.args))

    try:
        upstream_require(context)
    except Exception as e:
        fail(e)


if __name__ == "__main__":
    app()
