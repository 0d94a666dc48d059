"""Environment configuration store.

Config lives at ~/.config/grafana-connect/config.yaml. Resolution order for
the path:
1. --config flag (highest)
2. GRAFANA_CONNECT_CONFIG env var
3. Default per-user location
"""

from __future__ import annotations

import copy
import logging
import os
import tempfile
from dataclasses import asdict, dataclass, field
from pathlib import Path

import yaml

from grafana_connect.errors import ConfigError, ConfigNotFoundError

DEFAULT_DASHBOARD = "k8s-pod-resources-clean/kubernetes-pod-resource-dashboard-v3"
MASK = "*****"

_ENV_FIELDS = (
    "name",
    "alias",
    "context_match",
    "base_url",
    "dashboard",
    "prometheus_uid",
    "username",
    "password",
)


@dataclass
class Environment:
    """A Grafana target and the rule that maps cluster contexts onto it."""

    name: str = ""
    alias: str = ""
    context_match: str = ""
    base_url: str = ""
    dashboard: str = ""
    prometheus_uid: str = ""
    username: str = ""
    password: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> Environment:
        values = {}
        for key in _ENV_FIELDS:
            value = data.get(key)
            values[key] = "" if value is None else str(value)
        values["base_url"] = values["base_url"].rstrip("/")
        return cls(**values)

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class Config:
    default_dashboard: str = DEFAULT_DASHBOARD
    default_prometheus_uid: str = ""
    environments: list[Environment] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> Config:
        if not isinstance(data, dict):
            raise ConfigError("top-level YAML document must be a mapping")
        raw_envs = data.get("environments") or []
        if not isinstance(raw_envs, list):
            raise ConfigError("'environments' must be a list")
        envs = []
        for i, entry in enumerate(raw_envs):
            if not isinstance(entry, dict):
                raise ConfigError(f"environment #{i + 1} must be a mapping")
            envs.append(Environment.from_dict(entry))
        dashboard = data.get("default_dashboard")
        prom_uid = data.get("default_prometheus_uid")
        return cls(
            default_dashboard=DEFAULT_DASHBOARD if dashboard is None else str(dashboard),
            default_prometheus_uid="" if prom_uid is None else str(prom_uid),
            environments=envs,
        )

    def to_dict(self) -> dict:
        return {
            "default_dashboard": self.default_dashboard,
            "default_prometheus_uid": self.default_prometheus_uid,
            "environments": [env.to_dict() for env in self.environments],
        }

    def dashboard_for(self, env: Environment) -> str:
        """Env-specific dashboard path, falling back to the global default."""
        return env.dashboard or self.default_dashboard

    def prometheus_uid_for(self, env: Environment) -> str:
        return env.prometheus_uid or self.default_prometheus_uid

    def find_by_base_url(self, base_url: str) -> int:
        """Index of the environment with this base URL, or -1."""
        base_url = base_url.rstrip("/")
        for i, env in enumerate(self.environments):
            if env.base_url == base_url:
                return i
        return -1

    def masked(self) -> Config:
        """Deep copy with every non-empty password replaced by MASK."""
        safe = copy.deepcopy(self)
        for env in safe.environments:
            if env.password:
                env.password = MASK
        return safe


def default_config_path() -> Path:
    return Path.home() / ".config" / "grafana-connect" / "config.yaml"


def get_config_path(override: str | None = None) -> Path:
    """Resolve the config file location."""
    if override:
        return Path(override).expanduser()
    env_path = os.environ.get("GRAFANA_CONNECT_CONFIG")
    if env_path:
        return Path(env_path).expanduser()
    return default_config_path()


def load_config(path: Path) -> Config:
    """Read and validate the config file.

    Raises ConfigNotFoundError when the file is absent and ConfigError when it
    cannot be read or parsed.
    """
    if not path.is_file():
        raise ConfigNotFoundError(f"config file not found: {path}")
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"could not read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"{path} is not valid YAML: {e}") from e
    logging.debug("Loaded config from %s", path)
    return Config.from_dict(data or {})


def save_config(path: Path, config: Config) -> None:
    """Write config atomically with owner-only permissions."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"could not create config directory {path.parent}: {e}") from e
    content = yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)
    try:
        _atomic_write(path, content)
    except OSError as e:
        raise ConfigError(f"could not write {path}: {e}") from e
    logging.debug("Saved %d environment(s) to %s", len(config.environments), path)


def dump_config(config: Config) -> str:
    return yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False)


def upsert_environment(config: Config, env: Environment, password: str | None = None) -> bool:
    """Insert env, or replace the entry sharing its base_url.

    password=None keeps the password of the entry being replaced (empty for a
    new entry). Returns True if an existing entry was updated.
    """
    env.base_url = env.base_url.rstrip("/")
    idx = config.find_by_base_url(env.base_url)
    if password is None:
        password = config.environments[idx].password if idx >= 0 else ""
    env.password = password
    if idx >= 0:
        config.environments[idx] = env
        return True
    config.environments.append(env)
    return False


def _atomic_write(path: Path, content: str) -> None:
    """Write file atomically via temp file + rename to prevent data loss on crash."""
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
    try:
        with os.fdopen(fd, "w") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.chmod(tmp_path, 0o600)
        os.replace(tmp_path, path)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise
