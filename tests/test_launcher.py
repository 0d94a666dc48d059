"""Tests for URL building and dashboard launching."""

from __future__ import annotations

import webbrowser
from unittest.mock import patch

from grafana_connect.config import Config, Environment
from grafana_connect.errors import ClipboardUnavailable
from grafana_connect.launcher import build_url, open_dashboard

EXPECTED = (
    "https://g.example.com/d/k8s/dash?orgId=1&refresh=30s&var-DS_PROMETHEUS=p1"
    "&var-namespace=prod-ns&var-deployment=All&var-pod=All&var-container=All"
)


class TestBuildUrl:
    def test_reference_example(self):
        env = Environment(base_url="https://g.example.com", dashboard="k8s/dash", prometheus_uid="p1")
        assert build_url(env, "prod-ns", "k8s/dash") == EXPECTED

    def test_deterministic(self):
        env = Environment(base_url="https://g.example.com", prometheus_uid="p1")
        assert build_url(env, "prod-ns", "k8s/dash") == build_url(env, "prod-ns", "k8s/dash")

    def test_trailing_slash_on_base_url(self):
        env = Environment(base_url="https://g.example.com/", prometheus_uid="p1")
        assert build_url(env, "prod-ns", "k8s/dash") == EXPECTED

    def test_explicit_uid_overrides_env(self):
        env = Environment(base_url="https://g.example.com", prometheus_uid="ignored")
        assert build_url(env, "prod-ns", "k8s/dash", prometheus_uid="p1") == EXPECTED

    def test_query_values_encoded(self):
        env = Environment(base_url="https://g.example.com", prometheus_uid="p/1")
        url = build_url(env, "a b&c", "k8s/dash")
        assert "var-DS_PROMETHEUS=p%2F1" in url
        assert "var-namespace=a+b%26c" in url


class TestOpenDashboard:
    @patch("grafana_connect.launcher.webbrowser.open", return_value=True)
    @patch("grafana_connect.launcher.copy_to_clipboard")
    def test_copies_password_and_opens(self, mock_copy, mock_open, config, environments, capsys):
        url = open_dashboard(config, environments[0], "payments")
        mock_copy.assert_called_once_with("s3cret")
        mock_open.assert_called_once_with(url)
        out = capsys.readouterr().out
        assert "Password copied" in out
        assert "Opening ackoprod [payments]" in out
        assert "var-namespace=payments" in url
        assert "/d/k8s/prod-dash?" in url

    @patch("grafana_connect.launcher.webbrowser.open", return_value=True)
    @patch("grafana_connect.launcher.copy_to_clipboard")
    def test_no_password_skips_clipboard(self, mock_copy, mock_open, config, environments):
        open_dashboard(config, environments[1], "default")
        mock_copy.assert_not_called()

    @patch("grafana_connect.launcher.webbrowser.open", return_value=True)
    @patch("grafana_connect.launcher.copy_to_clipboard")
    def test_global_fallbacks_used(self, mock_copy, mock_open, config, environments):
        url = open_dashboard(config, environments[2], "default")
        assert "/d/k8s-pod-resources-clean/" in url
        assert "var-DS_PROMETHEUS=prom-default" in url

    @patch("grafana_connect.launcher.webbrowser.open", return_value=True)
    @patch("grafana_connect.launcher.copy_to_clipboard", side_effect=ClipboardUnavailable("no tool"))
    def test_clipboard_failure_is_warning(self, mock_copy, mock_open, config, environments, capsys):
        open_dashboard(config, environments[0], "default")
        captured = capsys.readouterr()
        assert "clipboard unavailable" in captured.err
        mock_open.assert_called_once()

    @patch("grafana_connect.launcher.webbrowser.open", return_value=False)
    def test_browser_failure_prints_link(self, mock_open, config, environments, capsys):
        url = open_dashboard(config, environments[1], "default")
        captured = capsys.readouterr()
        assert "Failed to open browser" in captured.err
        assert f"Link: {url}" in captured.out

    @patch("grafana_connect.launcher.webbrowser.open", side_effect=webbrowser.Error("boom"))
    def test_browser_error_prints_link(self, mock_open, config, environments, capsys):
        url = open_dashboard(config, environments[1], "default")
        captured = capsys.readouterr()
        assert "boom" in captured.err
        assert url in captured.out

    @patch("grafana_connect.launcher.webbrowser.open", return_value=True)
    def test_empty_dashboard_warns(self, mock_open, capsys):
        cfg = Config(default_dashboard="")
        env = Environment(name="x", base_url="https://g.example.com")
        url = open_dashboard(cfg, env, "default")
        assert "no dashboard path" in capsys.readouterr().err
        assert url.startswith("https://g.example.com/d/?")
