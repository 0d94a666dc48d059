"""Tests for the list command."""

from __future__ import annotations

import argparse
from unittest.mock import patch

from grafana_connect.commands.list_cmd import cmd_list

MOD = "grafana_connect.commands.list_cmd"


class TestList:
    def test_opens_selected_with_default_namespace(self, config_file, environments):
        args = argparse.Namespace(config=str(config_file))
        with patch(f"{MOD}.select_environment", return_value=environments[1]), \
             patch(f"{MOD}.open_dashboard") as mock_open:
            cmd_list(args)
        _, env, ns = mock_open.call_args[0]
        assert env.name == "ackostg"
        assert ns == "default"

    def test_namespace_flag(self, config_file, environments):
        args = argparse.Namespace(config=str(config_file), namespace="web")
        with patch(f"{MOD}.select_environment", return_value=environments[0]), \
             patch(f"{MOD}.open_dashboard") as mock_open:
            cmd_list(args)
        assert mock_open.call_args[0][2] == "web"

    def test_previews_on_stderr(self, config_file, environments, capsys):
        args = argparse.Namespace(config=str(config_file))
        with patch(f"{MOD}.select_environment", return_value=environments[0]), \
             patch(f"{MOD}.open_dashboard"):
            cmd_list(args)
        assert "Environment: ACKOSTG" in capsys.readouterr().err

    def test_no_environments(self, tmp_path, capsys):
        path = tmp_path / "config.yaml"
        path.write_text("environments: []\n")
        with patch(f"{MOD}.select_environment") as mock_select:
            cmd_list(argparse.Namespace(config=str(path)))
        mock_select.assert_not_called()
        assert "no environments" in capsys.readouterr().err
