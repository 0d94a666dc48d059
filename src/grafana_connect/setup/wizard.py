"""Interactive prompts for adding or updating an environment entry."""

from __future__ import annotations

import getpass
import re

from grafana_connect.config import DEFAULT_DASHBOARD, Environment
from grafana_connect.errors import SelectionCancelled


def wizard_confirm(message: str = "Add/Update an environment? [y/N]: ") -> bool:
    """Ask whether to edit another entry. EOF answers no; Ctrl+C cancels."""
    try:
        answer = input(message)
    except EOFError:
        return False
    except KeyboardInterrupt as e:
        print()
        raise SelectionCancelled("setup wizard cancelled") from e
    return answer.strip().lower() in ("y", "yes")


def wizard_base_url() -> str:
    """Prompt for the Grafana base URL (the identity key of an entry)."""
    print("\n--- Environment Details ---")
    while True:
        url = _prompt("Grafana Base URL: ").strip().rstrip("/")
        if url:
            return url
        print("Base URL is required.")


def wizard_environment(
    base_url: str,
    existing: Environment | None = None,
    default_dashboard: str = DEFAULT_DASHBOARD,
) -> tuple[Environment, str | None]:
    """Prompt for the remaining fields, pre-filled from an existing entry.

    Returns the environment (password left empty) and the new password, or
    None when the user left it blank to keep the stored one.
    """
    prev = existing or Environment()

    name = _prompt_default("Name (e.g. ackoprod)", prev.name)
    alias = _prompt_default("Alias (shortcode e.g. prod)", prev.alias)
    context_match = _prompt_regex("Context Regex", prev.context_match or f".*{re.escape(name)}.*")
    dashboard = _prompt_default("Dashboard Path (slug)", prev.dashboard or default_dashboard)
    prometheus_uid = _prompt_default("Prometheus UID", prev.prometheus_uid)
    username = _prompt_default("Username", prev.username)
    password = _prompt_secret("Password (leave empty to keep): ")

    env = Environment(
        name=name,
        alias=alias,
        context_match=context_match,
        base_url=base_url,
        dashboard=dashboard,
        prometheus_uid=prometheus_uid,
        username=username,
    )
    return env, (password or None)


def _prompt_default(label: str, default: str) -> str:
    suffix = f" [{default}]" if default else ""
    answer = _prompt(f"{label}{suffix}: ").strip()
    return answer or default


def _prompt_regex(label: str, default: str) -> str:
    """Prompt until the answer compiles as a regular expression."""
    while True:
        pattern = _prompt_default(label, default)
        try:
            re.compile(pattern)
            return pattern
        except re.error as e:
            print(f"Invalid regex {pattern!r}: {e}")


def _prompt(message: str) -> str:
    """Prompt via stdin. EOF or Ctrl+C abandons the wizard."""
    try:
        return input(message)
    except (EOFError, KeyboardInterrupt) as e:
        print()
        raise SelectionCancelled("setup wizard cancelled") from e


def _prompt_secret(message: str) -> str:
    """Prompt for a secret value (no echo)."""
    try:
        return getpass.getpass(message)
    except (EOFError, KeyboardInterrupt) as e:
        print()
        raise SelectionCancelled("setup wizard cancelled") from e
