"""Add dependencies to the upstream-configuration layer of a custom upstream.

upstream-configuration/composer.json holds the modules, themes and other
dependencies inherited by every site created from the upstream. Keeping them
apart from the site's own dependencies lets the upstream change without
causing conflicts in downstream sites.

To add a dependency to an upstream::

    composer upstream-require drupal/modulename

Remove dependencies from an upstream with caution: the module or theme has to
be uninstalled from every site using it first, otherwise it can no longer be
cleanly uninstalled.
"""

import logging
import re

from .commands import CommandRunner, format_command
from .config import ScriptSettings
from .errors import UpstreamRequireError
from .manifest import load_json
from .models import HookContext

logger = logging.getLogger(__name__)

PACKAGE_ARGUMENT_PATTERN = re.compile(
    r"[a-zA-Z][a-zA-Z0-9_-]*/[a-zA-Z][a-zA-Z0-9]:*[~^]*[0-9a-z._-]*"
)
CUSTOM_UPSTREAM_DOCS = "https://pantheon.io/docs/create-custom-upstream"


def package_arguments(arguments: list[str]) -> list[str]:
    """Select the arguments that look like package specifiers."""
    return [arg for arg in arguments if PACKAGE_ARGUMENT_PATTERN.search(arg)]


def versionless(packages: list[str]) -> list[str]:
    """Strip ":constraint" suffixes, e.g. drupal/token:^1 -> drupal/token."""
    return [re.sub(r":.*", "", package) for package in packages]


def ensure_custom_upstream(
    context: HookContext, project_name: str, origin_url: str, settings: ScriptSettings
) -> None:
    """Refuse to run on the canonical template or on a live site checkout.

    Raises:
        UpstreamRequireError: If the project is an unrenamed clone of the
            standard upstream, or a local working copy of a hosted site
    """
    is_standard_upstream = any(
        template in project_name for template in settings.canonical_templates
    )
    is_hosted_site = settings.live_site_marker in origin_url

    if is_standard_upstream or is_hosted_site:
        context.io.write_error(
            "The upstream-require command can only be used with a custom upstream",
            severity="info",
        )
        context.io.write_error(
            f"See {CUSTOM_UPSTREAM_DOCS} for information on how to create a custom upstream.\n",
            severity="info",
        )
        raise UpstreamRequireError("Cannot use upstream-require command with this project.")


def update_local_dependencies(
    context: HookContext, runner: CommandRunner, packages: list[str]
) -> bool:
    """Update the top-level composer.lock, if there is one, for local testing.

    Returns:
        True if composer update was run
    """
    if not context.lock_path.exists():
        return False

    context.io.write_error(
        "composer.lock file present; do not commit composer.lock to a custom upstream, "
        "but updating for the purpose of local testing.",
        severity="warning",
    )

    cmd = runner.composer("update", *versionless(packages))
    context.io.write_error(format_command(cmd) + "\n")
    runner.run(cmd, cwd=context.project_root, env=context.env)
    return True


def upstream_require(
    context: HookContext, runner: CommandRunner, settings: ScriptSettings
) -> list[str]:
    """Insert packages into upstream-configuration/composer.json.

    The upstream manifest is changed without updating any lock file or
    downloading anything; composer does that work itself.

    Returns:
        The package specifiers that were passed on to composer
    """
    manifest = load_json(context.manifest_path)
    project_name = manifest.get("name") or ""
    origin_url = runner.origin_url(cwd=context.project_root)
    logger.debug("Project %r, origin %r", project_name, origin_url)

    ensure_custom_upstream(context, project_name, origin_url, settings)

    packages = package_arguments(context.arguments)

    cmd = runner.composer(
        f"--working-dir={settings.upstream_dir}", "require", "--no-update", *packages
    )
    context.io.write_error(format_command(cmd) + "\n")
    runner.run(cmd, cwd=context.project_root, env=context.env)

    update_local_dependencies(context, runner, packages)

    return packages
