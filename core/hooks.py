"""Entry points wired into composer.json's scripts section.

Two lifecycle hooks (pre-update-cmd, post-update-cmd) and one command
(upstream-require) each take a HookContext.
"""

from rich.console import Console

from .commands import CommandRunner
from .config import ScriptSettings, load_settings
from .manifest import load_json
from .models import HookContext, PlatformAlignment, RefineReport
from .platform import before_update
from .refine import starter_project_configuration
from .upstream import upstream_require as require_in_upstream

SEVERITY_STYLES = {
    "info": "green",
    "warning": "yellow",
    "error": "red",
}


class ScriptIO:
    """Progress goes to stdout, diagnostics to stderr."""

    def __init__(self, console: Console | None = None, error_console: Console | None = None):
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)

    def write(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False, soft_wrap=True)

    def write_error(self, message: str, severity: str | None = None) -> None:
        self.error_console.print(
            message,
            style=SEVERITY_STYLES.get(severity or ""),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )


def _settings_for(context: HookContext, settings: ScriptSettings | None) -> ScriptSettings:
    if settings is not None:
        return settings
    manifest = load_json(context.manifest_path) if context.manifest_path.exists() else None
    return load_settings(manifest, context.env)


def _runner_for(settings: ScriptSettings, runner: CommandRunner | None) -> CommandRunner:
    if runner is not None:
        return runner
    return CommandRunner(composer_binary=settings.composer_binary, git_binary=settings.git_binary)


def pre_update(
    context: HookContext,
    runner: CommandRunner | None = None,
    settings: ScriptSettings | None = None,
) -> PlatformAlignment | None:
    """pre-update-cmd: pin the root version and align the PHP platform."""
    settings = _settings_for(context, settings)
    return before_update(context, _runner_for(settings, runner), settings)


def post_update(context: HookContext) -> RefineReport:
    """post-update-cmd: apply the one-time starter configuration."""
    return starter_project_configuration(context)


def upstream_require(
    context: HookContext,
    runner: CommandRunner | None = None,
    settings: ScriptSettings | None = None,
) -> list[str]:
    """upstream-require: add packages to the upstream-configuration layer."""
    settings = _settings_for(context, settings)
    return require_in_upstream(context, _runner_for(settings, runner), settings)
