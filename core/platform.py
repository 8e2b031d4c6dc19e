"""Preparation that runs before composer resolves dependencies."""

import logging
import re
from pathlib import Path
from typing import Any

from packaging.version import InvalidVersion, Version

from .commands import CommandRunner
from .config import ScriptSettings
from .manifest import load_json
from .models import HookContext, PlatformAlignment

logger = logging.getLogger(__name__)

PHP_VERSION_LINE = re.compile(r"^php_version: ([0-9]+\.[0-9]+)$", re.MULTILINE)


def pin_root_version(context: HookContext, settings: ScriptSettings) -> bool:
    """Fix the version composer guesses for path repositories.

    Composer infers the root package version from the checked-out git branch,
    so the same update run on two branches produces two different lock
    files. Pinning the variable to dev-main keeps composer.lock stable.
    A value that is already set is left alone.

    Returns:
        True if the variable was set
    """
    variable = settings.root_version_variable
    if context.env.get(variable):
        return False

    # Not an error; diagnostics go to stderr
    context.io.write_error(
        f"Using version '{settings.root_version}' for path repositories.", severity="info"
    )
    context.env[variable] = settings.root_version
    return True


def provider_php_version(project_root: Path, settings: ScriptSettings) -> str | None:
    """Read php_version (major.minor) from the hosting provider config."""
    for filename in settings.provider_config_files:
        path = Path(project_root) / filename
        if not path.is_file():
            continue
        match = PHP_VERSION_LINE.search(path.read_text(encoding="utf-8"))
        if match:
            return match.group(1)
    return None


def best_php_patch_version(major_minor: str | None, table: dict[str, str]) -> str:
    """Best patch release for a PHP major.minor, or "" if unsupported."""
    if not major_minor:
        return ""
    return table.get(major_minor, "")


def current_platform_php(manifest: dict[str, Any]) -> str | None:
    """The config.platform.php value of a manifest, if set."""
    platform = (manifest.get("config") or {}).get("platform") or {}
    php = platform.get("php")
    return str(php) if php is not None else None


def same_minor_series(current: str | None, required: str) -> bool:
    """Check whether current (e.g. 8.1.0) belongs to required (e.g. 8.1)."""
    if not current:
        return False
    try:
        current_release = Version(current).release
        required_release = Version(required).release
    except InvalidVersion:
        return False
    return current_release[:2] == required_release[:2]


def needs_alignment(current: str | None, required: str, best: str) -> bool:
    """Check whether config.platform.php should move to the best patch release.

    A version from another minor series always moves. Within the series, an
    older patch release is raised to the best one and a newer one is kept.
    """
    if not same_minor_series(current, required):
        return True
    try:
        return Version(current) < Version(best)
    except InvalidVersion:
        return False


def align_platform_php(
    context: HookContext, runner: CommandRunner, settings: ScriptSettings
) -> PlatformAlignment:
    """Set config.platform.php to the provider's best supported patch release."""
    manifest = load_json(context.manifest_path)
    alignment = PlatformAlignment(
        current=current_platform_php(manifest),
        required=provider_php_version(context.project_root, settings),
    )

    if alignment.required is None:
        return alignment

    best = best_php_patch_version(alignment.required, settings.php_patch_versions)
    if not best:
        # Unsupported PHP version selected; nothing to align to
        logger.debug("No patch release known for PHP %s", alignment.required)
        return alignment
    if not needs_alignment(alignment.current, alignment.required, best):
        return alignment

    context.io.write(
        f"Setting platform.php from '{alignment.current or ''}' to '{best}' "
        f"to conform to the hosting provider's PHP version."
    )
    runner.run(
        runner.composer("config", "platform.php", best),
        cwd=context.project_root,
        env=context.env,
    )
    alignment.target = best
    return alignment


def before_update(
    context: HookContext, runner: CommandRunner, settings: ScriptSettings
) -> PlatformAlignment | None:
    """Run every pre-update step enabled in the settings."""
    pin_root_version(context, settings)

    if not settings.align_platform_php:
        return None
    return align_platform_php(context, runner, settings)
