"""Tests for the root CLI group and its global flags."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from ppectl import __version__
from ppectl.cli import cli


class TestCli:
    def test_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "menu" in result.output
        assert "--json" in result.output

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--examples"])
        assert result.exit_code == 0
        assert "ppectl --json" in result.output

    def test_menu_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["menu", "--examples"])
        assert result.exit_code == 0
        assert "ppectl menu" in result.output


@pytest.mark.usefixtures("_isolated_cwd")
class TestGlobalFlags:
    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json"], input="1\n2\n0\n0\n")
        assert result.exit_code == 0
        start = result.output.index("{")
        payload, _ = json.JSONDecoder().raw_decode(result.output[start:])
        assert payload["ok"] is True
        assert payload["op"] == "list_employees"
        assert payload["data"]["empty"] is True

    def test_quiet_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q"], input="1\n1\nAna\nSafety\n1\n0\n0\n")
        assert "OK: register_employee" in result.output

    def test_orphan_policy_from_config(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "ppectl.toml").write_text('[references]\non_delete = "orphan"\n')
        lines = [
            "1", "1", "Ana", "Safety", "1", "0",
            "2", "1", "Helmet", "1", "", "0",
            "3", "1", "0", "0", "2025-01-10", "2025-01-20", "0",
            "1", "4", "0", "y", "0",
            "3", "2", "0", "0",
        ]  # fmt: skip
        result = cli_runner.invoke(cli, [], input="\n".join(lines) + "\n")
        assert result.exit_code == 0
        assert "OK  remove_employee" in result.output
        assert "LOAN-0001 now references a removed employee" in result.output
        assert "Employee: <removed>" in result.output

    def test_explicit_config_flag(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        config = tmp_path / "conf" / "site.toml"
        config.parent.mkdir()
        config.write_text('[display]\nnone_label = "n/a"\n')
        lines = ["2", "1", "Gloves", "4", "", "2", "0", "0"]
        result = cli_runner.invoke(cli, ["-c", str(config)], input="\n".join(lines) + "\n")
        assert "Expiry:        n/a" in result.output
