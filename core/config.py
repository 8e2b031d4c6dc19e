"""Settings for the upstream Composer scripts.

Defaults describe the hosting platform's Drupal upstream. A project can
override them under ``extra.upstream-scripts`` in composer.json, e.g.::

    "extra": {
        "upstream-scripts": {
            "upstream-dir": "upstream-configuration",
            "align-platform-php": false
        }
    }
"""

import os
from dataclasses import dataclass, field, fields
from typing import Any, Mapping

from .errors import SettingsError

EXTRA_KEY = "upstream-scripts"

DEFAULT_PHP_PATCH_VERSIONS = {
    "8.2": "8.2.0",
    "8.1": "8.1.13",
    "8.0": "8.0.26",
    "7.4": "7.4.33",
    "7.3": "7.3.33",
    "7.2": "7.2.34",
    "7.1": "7.1.33",
}


@dataclass
class ScriptSettings:
    """Tunable values used by the hooks and the upstream-require command."""

    canonical_templates: list[str] = field(
        default_factory=lambda: [
            "pantheon-systems/drupal-composer-managed",
            "pantheon-systems/drupal-universal",
        ]
    )
    live_site_marker: str = "@codeserver"
    upstream_dir: str = "upstream-configuration"
    root_version: str = "dev-main"
    root_version_variable: str = "COMPOSER_ROOT_VERSION"
    provider_config_files: list[str] = field(
        default_factory=lambda: ["pantheon.yml", "pantheon.upstream.yml"]
    )
    php_patch_versions: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_PHP_PATCH_VERSIONS)
    )
    align_platform_php: bool = True
    composer_binary: str = "composer"
    git_binary: str = "git"


def _expected_type(name: str) -> type:
    defaults = ScriptSettings()
    return type(getattr(defaults, name))


def _apply_overrides(settings: ScriptSettings, overrides: Mapping[str, Any]) -> None:
    known = {f.name for f in fields(ScriptSettings)}

    for key, value in overrides.items():
        name = key.replace("-", "_")
        if name not in known:
            continue

        expected = _expected_type(name)
        if not isinstance(value, expected):
            raise SettingsError(
                f"extra.{EXTRA_KEY}.{key} must be of type {expected.__name__}, "
                f"got {type(value).__name__}"
            )
        if expected is list and not all(isinstance(item, str) for item in value):
            raise SettingsError(f"extra.{EXTRA_KEY}.{key} must be a list of strings")
        if expected is dict and not all(
            isinstance(k, str) and isinstance(v, str) for k, v in value.items()
        ):
            raise SettingsError(f"extra.{EXTRA_KEY}.{key} must map strings to strings")

        setattr(settings, name, value)


def load_settings(
    manifest: Mapping[str, Any] | None = None,
    env: Mapping[str, str] | None = None,
) -> ScriptSettings:
    """Build settings from defaults, composer.json extra and the environment.

    Args:
        manifest: Decoded composer.json, if available
        env: Environment variables (defaults to os.environ)

    Returns:
        Resolved ScriptSettings

    Raises:
        SettingsError: If an override has the wrong type
    """
    settings = ScriptSettings()
    env = os.environ if env is None else env

    extra = (manifest or {}).get("extra") or {}
    overrides = extra.get(EXTRA_KEY) if isinstance(extra, dict) else None
    if overrides is not None:
        if not isinstance(overrides, dict):
            raise SettingsError(f"extra.{EXTRA_KEY} must be an object")
        _apply_overrides(settings, overrides)

    if env.get("UPSTREAM_SCRIPTS_COMPOSER"):
        settings.composer_binary = env["UPSTREAM_SCRIPTS_COMPOSER"]
    if env.get("UPSTREAM_SCRIPTS_GIT"):
        settings.git_binary = env["UPSTREAM_SCRIPTS_GIT"]

    return settings
