"""Build the dashboard URL and open it, copying the password first."""

from __future__ import annotations

import sys
import webbrowser
from urllib.parse import urlencode

from grafana_connect.clipboard import copy_to_clipboard
from grafana_connect.config import Config, Environment
from grafana_connect.errors import ClipboardUnavailable


def build_url(
    env: Environment,
    namespace: str,
    dashboard: str,
    prometheus_uid: str | None = None,
) -> str:
    """Dashboard URL with the fixed query parameter order Grafana links use."""
    uid = env.prometheus_uid if prometheus_uid is None else prometheus_uid
    params = [
        ("orgId", "1"),
        ("refresh", "30s"),
        ("var-DS_PROMETHEUS", uid),
        ("var-namespace", namespace),
        ("var-deployment", "All"),
        ("var-pod", "All"),
        ("var-container", "All"),
    ]
    return f"{env.base_url.rstrip('/')}/d/{dashboard}?{urlencode(params)}"


def open_dashboard(config: Config, env: Environment, namespace: str) -> str:
    """Copy the password (if any) and open the dashboard. Returns the URL.

    Clipboard and browser failures are reported but not fatal.
    """
    dashboard = config.dashboard_for(env)
    if not dashboard:
        print("Warning: no dashboard path set for this environment.", file=sys.stderr)

    url = build_url(env, namespace, dashboard, config.prometheus_uid_for(env))

    if env.password:
        try:
            copy_to_clipboard(env.password)
            print("Password copied to clipboard.")
        except ClipboardUnavailable as e:
            print(f"Warning: clipboard unavailable: {e}", file=sys.stderr)

    print(f"Opening {env.name} [{namespace}]...")
    reason = "no runnable browser found"
    try:
        opened = webbrowser.open(url)
    except webbrowser.Error as e:
        opened, reason = False, str(e)
    if not opened:
        print(f"Failed to open browser: {reason}", file=sys.stderr)
        print(f"  Link: {url}")
    return url
