"""Terminal pickers for environments and namespaces.

Items are listed with numbers on stderr so stdout stays clean. The user
answers with a number, or with text to narrow the list down. Empty input,
'q', EOF or Ctrl+C cancel the selection.
"""

from __future__ import annotations

import sys
from typing import Callable, Sequence, TypeVar

from grafana_connect.config import Environment
from grafana_connect.errors import SelectionCancelled

T = TypeVar("T")


def select_item(label: str, items: Sequence[T], display: Callable[[T], str] = str) -> T:
    """Pick one item. Raises SelectionCancelled if the user backs out."""
    if not items:
        raise SelectionCancelled(f"nothing to select for {label}")

    candidates = list(range(len(items)))
    while True:
        print(f"\n{label}:", file=sys.stderr)
        for n, i in enumerate(candidates, 1):
            print(f"  {n:>3}. {display(items[i])}", file=sys.stderr)

        answer = _prompt(f"{label} [1-{len(candidates)}, text to filter, q to quit] > ").strip()
        if not answer or answer.lower() == "q":
            raise SelectionCancelled(f"{label} selection cancelled")

        if answer.isdigit():
            n = int(answer)
            if 1 <= n <= len(candidates):
                return items[candidates[n - 1]]
            print(f"Out of range: {n}", file=sys.stderr)
            continue

        needle = answer.lower()
        narrowed = [i for i in candidates if needle in display(items[i]).lower()]
        if len(narrowed) == 1:
            return items[narrowed[0]]
        if not narrowed:
            print(f"No match for {answer!r}", file=sys.stderr)
            continue
        candidates = narrowed


def select_string(label: str, items: Sequence[str]) -> str:
    return select_item(label, items)


def select_environment(envs: Sequence[Environment]) -> Environment:
    return select_item("Environment", envs, _env_line)


def env_preview(env: Environment) -> str:
    """Multi-line summary of an environment for listing."""
    return (
        f"Environment: {env.name.upper()}\n"
        f"  URL:      {env.base_url}\n"
        f"  PromUID:  {env.prometheus_uid}\n"
        f"  User:     {env.username}\n"
        f"  Matcher:  {env.context_match}"
    )


def _env_line(env: Environment) -> str:
    alias = f" ({env.alias})" if env.alias else ""
    return f"{env.name}{alias}  {env.base_url}"


def _prompt(message: str) -> str:
    """Prompt via stdin; EOF and Ctrl+C count as cancellation."""
    try:
        return input(message)
    except (EOFError, KeyboardInterrupt):
        print(file=sys.stderr)
        return ""
