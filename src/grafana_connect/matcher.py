"""Map cluster contexts and aliases onto configured environments."""

from __future__ import annotations

import re

from grafana_connect.config import Environment
from grafana_connect.errors import AliasNotFoundError, InvalidPatternError, NoMatchError


def compile_pattern(name: str, pattern: str) -> re.Pattern:
    """Compile a context_match regex, naming the owning entry on failure."""
    try:
        return re.compile(pattern)
    except re.error as e:
        raise InvalidPatternError(name, pattern, str(e)) from e


def find_matching_env(context: str, environments: list[Environment]) -> Environment:
    """Return the first environment whose context_match matches context.

    Entries are scanned in list order and the first hit wins, so earlier
    entries take priority when patterns overlap. Empty patterns are skipped.
    """
    for env in environments:
        if not env.context_match:
            continue
        if compile_pattern(env.name, env.context_match).search(context):
            return env
    raise NoMatchError(context)


def find_by_alias(alias: str, environments: list[Environment]) -> Environment:
    """Exact, case-sensitive alias lookup. First match wins."""
    if alias:
        for env in environments:
            if env.alias == alias:
                return env
    raise AliasNotFoundError(alias)
