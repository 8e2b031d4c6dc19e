"""External command execution (composer, git)."""

import logging
import shlex
import subprocess
from pathlib import Path

logger = logging.getLogger(__name__)


def format_command(args: list[str]) -> str:
    """Render an argument vector the way it would be typed in a shell."""
    return shlex.join(args)


class CommandRunner:
    """Runs composer and git synchronously in the project directory."""

    def __init__(self, composer_binary: str = "composer", git_binary: str = "git"):
        self.composer_binary = composer_binary
        self.git_binary = git_binary

    def composer(self, *args: str) -> list[str]:
        """Build a composer argument vector."""
        return [self.composer_binary, *args]

    def git(self, *args: str) -> list[str]:
        """Build a git argument vector."""
        return [self.git_binary, *args]

    def run(
        self,
        args: list[str],
        cwd: Path | None = None,
        env: dict[str, str] | None = None,
    ) -> int:
        """Run a command with its output passed straight through.

        Returns:
            The exit status. Callers decide whether it matters; the scripts
            themselves never check it.
        """
        logger.debug("Running %s", format_command(args))
        completed = subprocess.run(args, cwd=cwd, env=env, check=False)
        if completed.returncode != 0:
            logger.debug("%s exited with %d", args[0], completed.returncode)
        return completed.returncode

    def capture(self, args: list[str], cwd: Path | None = None) -> str:
        """Run a command and return its stripped stdout, or "" on failure."""
        try:
            completed = subprocess.run(
                args, cwd=cwd, capture_output=True, text=True, check=False
            )
        except OSError as e:
            logger.debug("Could not run %s: %s", args[0], e)
            return ""
        if completed.returncode != 0:
            return ""
        return completed.stdout.strip()

    def origin_url(self, cwd: Path | None = None) -> str:
        """URL of the git remote named origin, or "" outside a clone."""
        return self.capture(self.git("config", "--get", "remote.origin.url"), cwd=cwd)
