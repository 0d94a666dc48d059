"""Error types raised by grafana-connect.

Command handlers catch GrafanaConnectError, print the message to stderr and
exit non-zero. SelectionCancelled and ClipboardUnavailable are not fatal.
"""

from __future__ import annotations


class GrafanaConnectError(Exception):
    """Base class for all grafana-connect errors."""

    hint = ""


class ConfigNotFoundError(GrafanaConnectError):
    hint = "Run 'grafana-connect config update' to generate one."


class ConfigError(GrafanaConnectError):
    """Config file exists but cannot be read or has the wrong shape."""


class InvalidPatternError(GrafanaConnectError):
    """A context_match regex does not compile."""

    def __init__(self, name: str, pattern: str, reason: str) -> None:
        super().__init__(f"invalid regex in config for {name!r} ({pattern!r}): {reason}")
        self.name = name
        self.pattern = pattern


class ClusterError(GrafanaConnectError):
    """Kubeconfig is missing/unusable or the cluster API call failed."""


class NoMatchError(GrafanaConnectError):
    hint = "Use '-I' to select an environment manually."

    def __init__(self, context: str) -> None:
        super().__init__(f"no mapping found for context: {context}")
        self.context = context


class AliasNotFoundError(GrafanaConnectError):
    hint = "Run 'grafana-connect config get' to see configured aliases."

    def __init__(self, alias: str) -> None:
        super().__init__(f"no environment with alias: {alias!r}")
        self.alias = alias


class NoNamespacesError(GrafanaConnectError):
    def __init__(self, context: str) -> None:
        super().__init__(f"no namespaces found in context: {context}")
        self.context = context


class SelectionCancelled(GrafanaConnectError):
    """User aborted an interactive picker."""


class ClipboardUnavailable(GrafanaConnectError):
    """No usable clipboard tool on this system."""
