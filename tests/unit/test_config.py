"""Tests for settings loading."""

import pytest

from core.config import DEFAULT_PHP_PATCH_VERSIONS, ScriptSettings, load_settings
from core.errors import SettingsError


class TestLoadSettings:
    """Test defaults and overrides."""

    def test_defaults(self):
        settings = load_settings({}, env={})

        assert settings == ScriptSettings()
        assert settings.upstream_dir == "upstream-configuration"
        assert settings.root_version == "dev-main"
        assert settings.live_site_marker == "@codeserver"
        assert "pantheon-systems/drupal-composer-managed" in settings.canonical_templates
        assert settings.provider_config_files == ["pantheon.yml", "pantheon.upstream.yml"]
        assert settings.php_patch_versions == DEFAULT_PHP_PATCH_VERSIONS
        assert settings.align_platform_php is True

    def test_defaults_not_shared(self):
        """Should give each settings object its own mutable defaults."""
        first = ScriptSettings()
        first.php_patch_versions["9.0"] = "9.0.0"

        assert "9.0" not in ScriptSettings().php_patch_versions

    def test_extra_overrides(self):
        """Should read kebab-case keys from extra.upstream-scripts."""
        manifest = {
            "extra": {
                "upstream-scripts": {
                    "upstream-dir": "shared-config",
                    "align-platform-php": False,
                    "php-patch-versions": {"8.3": "8.3.0"},
                    "unknown-key": 42,
                }
            }
        }

        settings = load_settings(manifest, env={})

        assert settings.upstream_dir == "shared-config"
        assert settings.align_platform_php is False
        assert settings.php_patch_versions == {"8.3": "8.3.0"}

    def test_env_overrides_binaries(self):
        settings = load_settings(
            {}, env={"UPSTREAM_SCRIPTS_COMPOSER": "/opt/composer.phar", "UPSTREAM_SCRIPTS_GIT": "/usr/bin/git"}
        )

        assert settings.composer_binary == "/opt/composer.phar"
        assert settings.git_binary == "/usr/bin/git"

    def test_no_manifest(self):
        assert load_settings(None, env={}) == ScriptSettings()

    @pytest.mark.parametrize(
        "overrides",
        [
            {"upstream-dir": 5},
            {"align-platform-php": "yes"},
            {"canonical-templates": ["a", 1]},
            {"php-patch-versions": {"8.1": 813}},
        ],
    )
    def test_wrong_types(self, overrides):
        """Should reject values of the wrong type."""
        with pytest.raises(SettingsError):
            load_settings({"extra": {"upstream-scripts": overrides}}, env={})

    def test_extra_not_an_object(self):
        with pytest.raises(SettingsError):
            load_settings({"extra": {"upstream-scripts": ["nope"]}}, env={})
