"""Configuration management: view, edit, locate."""

from __future__ import annotations

import sys

from grafana_connect.config import (
    Config,
    dump_config,
    get_config_path,
    load_config,
    save_config,
    upsert_environment,
)
from grafana_connect.errors import ConfigNotFoundError
from grafana_connect.setup.wizard import wizard_base_url, wizard_confirm, wizard_environment


def cmd_config(args) -> None:
    """Dispatch config subcommands."""
    action = getattr(args, "config_action", None)
    config_path = get_config_path(getattr(args, "config", None))

    if action == "get":
        _config_get(config_path)
    elif action == "update":
        _config_update(config_path)
    elif action == "path":
        print(config_path)
    else:
        print("Usage: grafana-connect config {get|update|path}", file=sys.stderr)
        sys.exit(1)


def _config_get(config_path) -> None:
    """Print the config with passwords masked."""
    config = load_config(config_path)
    print("# Current Configuration (Passwords Masked)")
    print(dump_config(config.masked()))


def _config_update(config_path) -> None:
    """Wizard: add or update environments keyed by base URL, then save."""
    try:
        config = load_config(config_path)
        print(f"Loading config from: {config_path}")
    except ConfigNotFoundError:
        config = Config()

    print("Starting setup wizard...")
    changed = False
    while wizard_confirm():
        base_url = wizard_base_url()
        idx = config.find_by_base_url(base_url)
        existing = config.environments[idx] if idx >= 0 else None
        if existing:
            print("Updating existing environment entry.")

        env, password = wizard_environment(base_url, existing, config.default_dashboard)
        upsert_environment(config, env, password)
        changed = True
        print(f"Saved environment '{env.name}'.")

    if not changed and config_path.exists():
        print("No changes made.")
        return

    save_config(config_path, config)
    print(f"\nConfig saved to: {config_path}")
