"""Default command: resolve (environment, namespace) and open Grafana.

Selection modes, first satisfied wins:
1. --alias: environment by alias, namespace "default"
2. -I: pick environment, then pick a namespace from its cluster if a
   kubeconfig context matches its context_match (else "default")
3. -i: environment from current context, pick a namespace from its cluster
4. no flags: environment from current context, the context's namespace
--namespace replaces whatever namespace the mode produced.
"""

from __future__ import annotations

import logging

from grafana_connect.config import Config, Environment, get_config_path, load_config
from grafana_connect.errors import NoNamespacesError
from grafana_connect.kube import find_context_by_regex, get_current_state, list_namespaces
from grafana_connect.launcher import open_dashboard
from grafana_connect.matcher import find_by_alias, find_matching_env
from grafana_connect.selector import select_environment, select_string

DEFAULT_NAMESPACE = "default"


def resolve_target(
    config: Config,
    alias: str | None = None,
    interactive_context: bool = False,
    interactive_namespace: bool = False,
    namespace_override: str | None = None,
    kubeconfig: str | None = None,
) -> tuple[Environment, str]:
    """Combine flags and cluster state into a single (environment, namespace)."""
    if alias:
        env = find_by_alias(alias, config.environments)
        namespace = DEFAULT_NAMESPACE
        mode = "alias"
    elif interactive_context:
        env = select_environment(config.environments)
        namespace = DEFAULT_NAMESPACE
        if env.context_match and not namespace_override:
            context = find_context_by_regex(env.context_match, kubeconfig, name=env.name)
            if context:
                namespace = _pick_namespace(context, kubeconfig)
            else:
                logging.debug("No kube context matches %r; using namespace %s",
                              env.context_match, DEFAULT_NAMESPACE)
        mode = "select-env"
    elif interactive_namespace:
        state = get_current_state(kubeconfig)
        env = find_matching_env(state.context, config.environments)
        namespace = namespace_override or _pick_namespace(state.context, kubeconfig)
        mode = "select-ns"
    else:
        state = get_current_state(kubeconfig)
        env = find_matching_env(state.context, config.environments)
        namespace = state.namespace
        mode = "auto"

    if namespace_override:
        namespace = namespace_override
    logging.debug("Resolved %s / %s via %s mode", env.name, namespace, mode)
    return env, namespace


def _pick_namespace(context: str, kubeconfig: str | None) -> str:
    namespaces = list_namespaces(context, kubeconfig)
    if not namespaces:
        raise NoNamespacesError(context)
    return select_string(f"Namespace ({context})", namespaces)


def cmd_launch(args) -> None:
    """Resolve the target and open its dashboard."""
    config = load_config(get_config_path(getattr(args, "config", None)))
    env, namespace = resolve_target(
        config,
        alias=getattr(args, "alias", None),
        interactive_context=getattr(args, "select_env", False),
        interactive_namespace=getattr(args, "select_ns", False),
        namespace_override=getattr(args, "namespace", None),
        kubeconfig=getattr(args, "kubeconfig", None),
    )
    open_dashboard(config, env, namespace)
