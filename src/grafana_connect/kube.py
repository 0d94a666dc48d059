"""Read local kubeconfig state and list namespaces of a cluster context."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import urllib3
import yaml
from kubernetes import client as k8s_client, config as k8s_config
from kubernetes.client.rest import ApiException

from grafana_connect.errors import ClusterError
from grafana_connect.matcher import compile_pattern

NAMESPACE_LIST_TIMEOUT = 5  # seconds


@dataclass
class KubeState:
    context: str
    namespace: str = "default"


def _list_contexts(kubeconfig: str | None) -> tuple[list[dict], dict | None]:
    try:
        return k8s_config.list_kube_config_contexts(config_file=kubeconfig)
    except k8s_config.ConfigException as e:
        raise ClusterError(f"could not load kubeconfig: {e}") from e
    except OSError as e:
        raise ClusterError(f"could not read kubeconfig: {e}") from e
    except yaml.YAMLError as e:
        raise ClusterError(f"kubeconfig is not valid YAML: {e}") from e


def get_current_state(kubeconfig: str | None = None) -> KubeState:
    """Current context name and its namespace (``default`` when unset)."""
    _, active = _list_contexts(kubeconfig)
    if not active or not active.get("name"):
        raise ClusterError("no current-context set in kubeconfig")
    ctx = active.get("context") or {}
    namespace = ctx.get("namespace") or "default"
    logging.debug("Current kube context %s (namespace %s)", active["name"], namespace)
    return KubeState(context=active["name"], namespace=namespace)


def find_context_by_regex(
    pattern: str,
    kubeconfig: str | None = None,
    name: str | None = None,
) -> str | None:
    """First kubeconfig context whose name matches pattern, in file order.

    name identifies the owning environment in pattern errors. Returns None
    when nothing matches or no kubeconfig is available.
    """
    regex = compile_pattern(name or pattern, pattern)
    try:
        contexts, _ = _list_contexts(kubeconfig)
    except ClusterError as e:
        logging.debug("No kubeconfig contexts to match %r against: %s", pattern, e)
        return None
    for ctx in contexts:
        ctx_name = ctx.get("name", "")
        if regex.search(ctx_name):
            return ctx_name
    return None


def list_namespaces(
    context: str,
    kubeconfig: str | None = None,
    timeout: float = NAMESPACE_LIST_TIMEOUT,
) -> list[str]:
    """List namespace names of the given context, sorted.

    The API call is bounded by timeout so an unreachable cluster cannot hang
    the launcher.
    """
    try:
        api = k8s_config.new_client_from_config(config_file=kubeconfig, context=context)
    except k8s_config.ConfigException as e:
        raise ClusterError(f"failed to build config for context {context}: {e}") from e

    try:
        core = k8s_client.CoreV1Api(api)
        logging.debug("Listing namespaces in %s (timeout %ss)", context, timeout)
        resp = core.list_namespace(_request_timeout=timeout)
    except ApiException as e:
        raise ClusterError(f"failed to list namespaces in {context}: {e.status} {e.reason}") from e
    except urllib3.exceptions.HTTPError as e:
        raise ClusterError(f"cluster for context {context} is unreachable: {e}") from e
    finally:
        api.close()

    return sorted(ns.metadata.name for ns in resp.items or [])
