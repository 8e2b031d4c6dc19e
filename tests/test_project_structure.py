"""Test that project structure is correct and modules can be imported."""

import os

import core.commands
import core.config
import core.hooks
import core.manifest
import core.models
import core.platform
import core.refine
import core.upstream
from core.models import HookContext, RefinedConstraint


def test_core_modules_importable():
    """Ensure core modules can be imported."""
    # This will fail if modules have syntax errors or missing dependencies

    # Basic smoke test - ensure key entry points exist
    assert hasattr(core.hooks, "pre_update")
    assert hasattr(core.hooks, "post_update")
    assert hasattr(core.hooks, "upstream_require")
    assert hasattr(core.refine, "refine")
    assert hasattr(core.upstream, "package_arguments")
    assert hasattr(core.platform, "before_update")


def test_model_creation(tmp_path):
    """Test that basic models can be instantiated."""
    entry = RefinedConstraint(name="drupal/core-recommended", constraint="^9")
    assert entry.section == "require"

    context = HookContext(project_root=tmp_path, io=None)
    assert context.manifest_path == tmp_path / "composer.json"
    assert context.lock_path == tmp_path / "composer.lock"
    assert context.arguments == []
    assert context.env == dict(os.environ)
    assert context.env is not os.environ
