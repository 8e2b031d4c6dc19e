"""One-time starter project configuration: refine version constraints.

If the top-level composer.json has a ``config.starter.refine-constraints``
element, each entry is a regular expression matched against the projects in
``require`` and ``require-dev``. Every matching project has its constraint
rewritten to the major version recorded in composer.lock, e.g. Drupal
constrained to ``*`` with 9.4.9 installed becomes ``^9``. The starter
configuration is removed afterwards, so this happens only once.
"""

import copy
import logging
import re
from typing import Any

from .errors import SettingsError
from .manifest import load_json, locked_packages, write_manifest
from .models import HookContext, RefinedConstraint, RefineReport

logger = logging.getLogger(__name__)

DEPENDENCY_SECTIONS = ("require", "require-dev")
MISSING_LOCK_MESSAGE = (
    "we need a composer.lock to work; please run 'composer install' or 'composer update'"
)


def refine_patterns(manifest: dict[str, Any]) -> list[str] | None:
    """Return the refine-constraints list, or None when it is not configured.

    Raises:
        SettingsError: If the value is not a list of pattern strings
    """
    config = manifest.get("config")
    if not isinstance(config, dict):
        return None
    starter = config.get("starter")
    if not isinstance(starter, dict) or starter.get("refine-constraints") is None:
        return None

    patterns = starter["refine-constraints"]
    if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
        raise SettingsError("config.starter.refine-constraints must be a list of strings")
    return list(patterns)


def is_matching_project(project: str, patterns: list[str]) -> bool:
    """Check whether a project name matches any of the refine patterns."""
    return any(re.search(pattern, project) for pattern in patterns)


def version_from_lock(project: str, lock: dict[str, Any]) -> str:
    """Installed version of a project per composer.lock, or "" if absent."""
    for package in locked_packages(lock):
        if package.name == project:
            return package.version
    return ""


def constraint_from_locked_version(version: str) -> str:
    """Convert an installed version such as 9.4.9 into the constraint ^9."""
    return "^" + version.split(".")[0]


def refine_constraints(
    projects: dict[str, str],
    patterns: list[str],
    lock: dict[str, Any],
    section: str = "require",
) -> tuple[dict[str, str], list[RefinedConstraint]]:
    """Pin the constraints of matching projects to their locked major version.

    Args:
        projects: Mapping of project name to version constraint
        patterns: Regular expressions selecting the projects to refine
        lock: Decoded composer.lock
        section: Manifest section the projects came from

    Returns:
        The updated mapping (original key order kept) and the refined entries
    """
    updated = dict(projects)
    refined: list[RefinedConstraint] = []

    for project in projects:
        if not is_matching_project(project, patterns):
            continue
        constraint = constraint_from_locked_version(version_from_lock(project, lock))
        updated[project] = constraint
        refined.append(RefinedConstraint(name=project, constraint=constraint, section=section))

    return updated, refined


def refine(
    manifest: dict[str, Any], lock: dict[str, Any]
) -> tuple[dict[str, Any], list[RefinedConstraint]]:
    """Apply the starter refine-constraints configuration to a manifest.

    The input is not modified. A manifest without the trigger is returned
    unchanged with no refined entries.
    """
    patterns = refine_patterns(manifest)
    if patterns is None:
        return manifest, []

    result = copy.deepcopy(manifest)
    refined: list[RefinedConstraint] = []

    for section in DEPENDENCY_SECTIONS:
        if section not in result:
            continue
        result[section], section_refined = refine_constraints(
            result[section] or {}, patterns, lock, section
        )
        refined.extend(section_refined)

    # One-time configuration
    del result["config"]["starter"]

    return result, refined


def starter_project_configuration(context: HookContext) -> RefineReport:
    """Refine the project's constraints and rewrite composer.json."""
    report = RefineReport()
    manifest = load_json(context.manifest_path)

    if refine_patterns(manifest) is None:
        return report

    if not context.lock_path.exists():
        context.io.write_error(MISSING_LOCK_MESSAGE, severity="warning")
        report.notes.append(MISSING_LOCK_MESSAGE)
        return report

    context.io.write("Configuring starter project")
    lock = load_json(context.lock_path)

    updated, report.refined = refine(manifest, lock)
    for entry in report.refined:
        context.io.write(f"  - {entry.name}: {entry.constraint}")

    write_manifest(context.manifest_path, updated)
    report.applied = True
    logger.debug("Refined %d constraint(s) in %s", len(report.refined), context.manifest_path)

    return report
