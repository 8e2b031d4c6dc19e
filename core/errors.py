"""Exceptions raised by the upstream Composer scripts."""


class UpstreamScriptsError(Exception):
    """Base class for errors that abort a script."""


class UpstreamRequireError(UpstreamScriptsError, RuntimeError):
    """upstream-require was run outside a customized, non-live upstream."""


class SettingsError(UpstreamScriptsError, ValueError):
    """extra.upstream-scripts in composer.json holds an invalid value."""
