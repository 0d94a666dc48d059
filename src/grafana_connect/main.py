"""grafana-connect CLI entry point.

Without a subcommand, detects the active Kubernetes context, maps it to a
configured Grafana environment and opens the dashboard filtered to the
resolved namespace.
"""

from __future__ import annotations

import argparse
import logging
import sys

from grafana_connect import __version__
from grafana_connect.commands.completion import cmd_complete, cmd_completion
from grafana_connect.commands.config import cmd_config
from grafana_connect.commands.launch import cmd_launch
from grafana_connect.commands.list_cmd import cmd_list
from grafana_connect.commands.version import cmd_version
from grafana_connect.errors import GrafanaConnectError, SelectionCancelled


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grafana-connect",
        description="Context-aware Grafana launcher. Detects your K8s context and "
                    "opens the matching Grafana dashboard with filters applied.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-a", "--alias", help="Open the environment with this alias (skips context detection)")
    parser.add_argument("-I", "--select-env", action="store_true",
                        help="Pick the environment (and namespace) interactively")
    parser.add_argument("-i", "--select-ns", action="store_true",
                        help="Pick a namespace interactively from the current cluster")
    parser.add_argument("-n", "--namespace", help="Namespace to open (overrides any detected or selected one)")
    parser.add_argument("--config", help="Config file (default: ~/.config/grafana-connect/config.yaml)")
    parser.add_argument("--kubeconfig", help="Kubeconfig file (default: $KUBECONFIG or ~/.kube/config)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command", metavar="{config,list,version,completion}")

    # config
    p_config = sub.add_parser("config", help="Manage configuration settings")
    config_sub = p_config.add_subparsers(dest="config_action", help="Config actions")
    config_sub.add_parser("get", help="Display current configuration (passwords masked)")
    config_sub.add_parser("update", help="Create or update environments interactively")
    config_sub.add_parser("path", help="Print the config file location")

    # list
    p_list = sub.add_parser("list", help="Pick any environment and open it")
    p_list.add_argument("-n", "--namespace", default=argparse.SUPPRESS, help="Namespace to open (default: default)")

    # version
    sub.add_parser("version", help="Print build information")

    # completion
    p_completion = sub.add_parser("completion", help="Print shell completion script")
    p_completion.add_argument("shell", choices=["bash", "zsh"])

    # __complete (hidden: no help entry)
    p_complete = sub.add_parser("__complete")
    p_complete.add_argument("kind", choices=["aliases", "namespaces"])
    p_complete.add_argument("-a", "--alias", default=argparse.SUPPRESS)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    dispatch = {
        None: cmd_launch,
        "config": cmd_config,
        "list": cmd_list,
        "version": cmd_version,
        "completion": cmd_completion,
        "__complete": cmd_complete,
    }

    handler = dispatch.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        handler(args)
    except SelectionCancelled as e:
        # Backing out of a picker is not an error
        logging.debug("%s", e)
        sys.exit(0)
    except GrafanaConnectError as e:
        print(f"Error: {e}", file=sys.stderr)
        if e.hint:
            print(f"  {e.hint}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
