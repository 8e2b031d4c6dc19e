"""Core data models for the upstream Composer scripts."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class LockedPackage:
    """A single package record from composer.lock."""

    name: str
    version: str = ""


@dataclass
class RefinedConstraint:
    """A dependency whose constraint was pinned to its installed major version."""

    name: str
    constraint: str
    section: str = "require"  # require, require-dev


@dataclass
class RefineReport:
    """Outcome of the one-time starter project configuration."""

    refined: list[RefinedConstraint] = field(default_factory=list)
    applied: bool = False
    notes: list[str] = field(default_factory=list)


@dataclass
class PlatformAlignment:
    """Result of reconciling config.platform.php with the hosting provider."""

    current: str | None = None
    required: str | None = None
    target: str | None = None

    @property
    def changed(self) -> bool:
        return bool(self.target)


@dataclass
class HookContext:
    """Everything a script entry point needs from its invocation."""

    project_root: Path
    io: Any
    arguments: list[str] = field(default_factory=list)
    env: dict[str, str] = field(default_factory=lambda: dict(os.environ))

    @property
    def manifest_path(self) -> Path:
        return self.project_root / "composer.json"

    @property
    def lock_path(self) -> Path:
        return self.project_root / "composer.lock"
