"""Pytest configuration and fixtures."""

import json
from io import StringIO

import pytest
from rich.console import Console

from core.hooks import ScriptIO
from core.models import HookContext


class CapturedIO(ScriptIO):
    """ScriptIO writing into in-memory buffers."""

    def __init__(self):
        self.out = StringIO()
        self.err = StringIO()
        super().__init__(
            Console(file=self.out, width=200, color_system=None),
            Console(file=self.err, width=200, color_system=None),
        )


@pytest.fixture
def sample_manifest():
    """A starter composer.json with refine-constraints configured."""
    return {
        "name": "acme/custom-upstream",
        "type": "project",
        "repositories": [
            {"type": "path", "url": "upstream-configuration"}
        ],
        "require": {
            "drupal/core-recommended": "*",
            "drupal/core-composer-scaffold": "*",
            "pantheon-upstreams/upstream-configuration": "dev-main",
            "composer/installers": "^1.9",
        },
        "require-dev": {
            "drupal/core-dev": "*",
        },
        "config": {
            "preferred-install": "dist",
            "starter": {
                "refine-constraints": [
                    "drupal/core-recommended",
                    "drupal/core-composer-scaffold",
                    "drupal/core-dev",
                ]
            },
        },
    }


@pytest.fixture
def sample_lock():
    """A composer.lock with Drupal 9 installed."""
    return {
        "packages": [
            {"name": "composer/installers", "version": "v1.12.0"},
            {"name": "drupal/core-composer-scaffold", "version": "9.4.9"},
            {"name": "drupal/core-recommended", "version": "9.4.9"},
        ],
        "packages-dev": [
            {"name": "drupal/core-dev", "version": "9.4.9"},
        ],
    }


@pytest.fixture
def project_dir(tmp_path, sample_manifest, sample_lock):
    """A project directory holding composer.json and composer.lock."""
    (tmp_path / "composer.json").write_text(json.dumps(sample_manifest, indent=4))
    (tmp_path / "composer.lock").write_text(json.dumps(sample_lock, indent=4))
    return tmp_path


@pytest.fixture
def captured_io():
    return CapturedIO()


@pytest.fixture
def hook_context(project_dir, captured_io, monkeypatch):
    """A HookContext for project_dir, built from a clean process environment."""
    for name in ("COMPOSER_ROOT_VERSION", "UPSTREAM_SCRIPTS_COMPOSER", "UPSTREAM_SCRIPTS_GIT"):
        monkeypatch.delenv(name, raising=False)
    return HookContext(project_root=project_dir, io=captured_io)
