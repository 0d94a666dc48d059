"""Pick any configured environment and open it, ignoring cluster state."""

from __future__ import annotations

import sys

from grafana_connect.config import get_config_path, load_config
from grafana_connect.launcher import open_dashboard
from grafana_connect.selector import env_preview, select_environment


def cmd_list(args) -> None:
    config_path = get_config_path(getattr(args, "config", None))
    config = load_config(config_path)
    if not config.environments:
        print(f"Warning: no environments defined in {config_path}", file=sys.stderr)
        return

    for env in config.environments:
        print(env_preview(env), file=sys.stderr)

    env = select_environment(config.environments)
    # Manual mode: no cluster lookup
    namespace = getattr(args, "namespace", None) or "default"
    open_dashboard(config, env, namespace)
