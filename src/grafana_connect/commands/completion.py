"""Shell completion scripts and the hidden value provider they call.

The scripts shell out to ``grafana-connect __complete aliases`` and
``grafana-connect __complete namespaces [--alias A]`` for dynamic values.
The provider never prints errors; a broken config or unreachable cluster
just yields no candidates.
"""

from __future__ import annotations

import logging
import sys

from grafana_connect.config import get_config_path, load_config
from grafana_connect.errors import GrafanaConnectError
from grafana_connect.kube import find_context_by_regex, get_current_state, list_namespaces
from grafana_connect.matcher import find_by_alias

COMPLETION_TIMEOUT = 2  # seconds; completion must stay snappy

SUBCOMMANDS = "config list version completion"
OPTIONS = (
    "-h --help --version -a --alias -i --select-ns -I --select-env "
    "-n --namespace --config --kubeconfig --debug"
)

_BASH_SCRIPT = r"""# bash completion for grafana-connect
_grafana_connect() {
    local cur prev i
    local -a alias_args
    cur="${COMP_WORDS[COMP_CWORD]}"
    prev="${COMP_WORDS[COMP_CWORD-1]}"

    case "$prev" in
        -a|--alias)
            COMPREPLY=( $(compgen -W "$(grafana-connect __complete aliases 2>/dev/null)" -- "$cur") )
            return 0
            ;;
        -n|--namespace)
            for ((i=1; i<COMP_CWORD-1; i++)); do
                case "${COMP_WORDS[i]}" in
                    -a|--alias) alias_args=(--alias "${COMP_WORDS[i+1]}") ;;
                esac
            done
            COMPREPLY=( $(compgen -W "$(grafana-connect __complete namespaces "${alias_args[@]}" 2>/dev/null)" -- "$cur") )
            return 0
            ;;
        --config|--kubeconfig)
            COMPREPLY=( $(compgen -f -- "$cur") )
            return 0
            ;;
        config)
            COMPREPLY=( $(compgen -W "get update path" -- "$cur") )
            return 0
            ;;
        completion)
            COMPREPLY=( $(compgen -W "bash zsh" -- "$cur") )
            return 0
            ;;
    esac

    if [[ "$cur" == -* ]]; then
        COMPREPLY=( $(compgen -W "@OPTIONS@" -- "$cur") )
    else
        COMPREPLY=( $(compgen -W "@SUBCOMMANDS@" -- "$cur") )
    fi
}
complete -F _grafana_connect grafana-connect
"""

_ZSH_PREAMBLE = """#compdef grafana-connect
autoload -U +X bashcompinit && bashcompinit
"""


def completion_script(shell: str) -> str:
    """Completion script source for bash or zsh."""
    script = _BASH_SCRIPT.replace("@OPTIONS@", OPTIONS).replace("@SUBCOMMANDS@", SUBCOMMANDS)
    if shell == "zsh":
        return _ZSH_PREAMBLE + script
    if shell == "bash":
        return script
    raise ValueError(f"unsupported shell: {shell}")


def cmd_completion(args) -> None:
    """Print the completion script for the requested shell."""
    print(completion_script(args.shell), end="")


def complete_aliases(config_path) -> list[str]:
    config = load_config(config_path)
    return [env.alias for env in config.environments if env.alias]


def complete_namespaces(config_path, alias: str | None = None, kubeconfig: str | None = None) -> list[str]:
    """Namespaces of the alias's cluster, or of the current context."""
    if alias:
        env = find_by_alias(alias, load_config(config_path).environments)
        if not env.context_match:
            return []
        context = find_context_by_regex(env.context_match, kubeconfig, name=env.name)
        if not context:
            return []
    else:
        context = get_current_state(kubeconfig).context
    return list_namespaces(context, kubeconfig, timeout=COMPLETION_TIMEOUT)


def cmd_complete(args) -> None:
    """Hidden provider: print one candidate per line."""
    config_path = get_config_path(getattr(args, "config", None))
    try:
        if args.kind == "aliases":
            values = complete_aliases(config_path)
        else:
            values = complete_namespaces(
                config_path,
                alias=getattr(args, "alias", None),
                kubeconfig=getattr(args, "kubeconfig", None),
            )
    except GrafanaConnectError as e:
        logging.debug("Completion for %s failed: %s", args.kind, e)
        return
    for value in values:
        sys.stdout.write(value + "\n")
