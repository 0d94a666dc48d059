"""Shared fixtures for grafana-connect tests."""

from __future__ import annotations

import pytest
import yaml

from grafana_connect.config import Config, Environment


@pytest.fixture
def environments():
    return [
        Environment(
            name="ackoprod",
            alias="prod",
            context_match=".*prod.*",
            base_url="https://grafana.prod.example.com",
            dashboard="k8s/prod-dash",
            prometheus_uid="prom-prod",
            username="admin",
            password="s3cret",
        ),
        Environment(
            name="ackostg",
            alias="stg",
            context_match="^stg-",
            base_url="https://grafana.stg.example.com",
            prometheus_uid="prom-stg",
            username="viewer",
        ),
        Environment(
            name="unmapped",
            alias="",
            context_match="",
            base_url="https://grafana.misc.example.com",
        ),
    ]


@pytest.fixture
def config(environments):
    return Config(default_prometheus_uid="prom-default", environments=environments)


@pytest.fixture
def config_file(tmp_path, config):
    """Config written to disk; returns its path."""
    path = tmp_path / "grafana-connect" / "config.yaml"
    path.parent.mkdir(parents=True)
    path.write_text(yaml.safe_dump(config.to_dict(), sort_keys=False))
    return path


@pytest.fixture
def kubeconfig(tmp_path):
    """Kubeconfig with two contexts; prod-eks is current with namespace payments."""
    data = {
        "apiVersion": "v1",
        "kind": "Config",
        "current-context": "prod-eks",
        "clusters": [
            {"name": "prod", "cluster": {"server": "https://prod.k8s.example.com"}},
            {"name": "stg", "cluster": {"server": "https://stg.k8s.example.com"}},
        ],
        "users": [{"name": "admin", "user": {"token": "abc123"}}],
        "contexts": [
            {"name": "prod-eks", "context": {"cluster": "prod", "user": "admin", "namespace": "payments"}},
            {"name": "stg-eks", "context": {"cluster": "stg", "user": "admin"}},
        ],
    }
    path = tmp_path / "kubeconfig"
    path.write_text(yaml.safe_dump(data))
    return str(path)
