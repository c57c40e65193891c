"""Tests for ``toolbridge serve``."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from toolbridge.cli import main


class TestServe:
    def test_nothing_to_serve(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["serve"])

        assert result.exit_code == 1
        assert "No tools registered" in result.output

    def test_config_error(self, tmp_path: Path) -> None:
        config = tmp_path / "toolbridge.yaml"
        config.write_text("modules: [unclosed\n", encoding="utf-8")

        runner = CliRunner()
        result = runner.invoke(main, ["serve", "-c", str(config)])

        assert result.exit_code == 1
        assert "Config error" in result.output

    def test_serves_over_stdio(self) -> None:
        requests = [
            {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}},
            {"jsonrpc": "2.0", "method": "notifications/initialized"},
            {"jsonrpc": "2.0", "id": 2, "method": "tools/list"},
            {
                "jsonrpc": "2.0",
                "id": 3,
                "method": "tools/call",
                "params": {"name": "greet", "arguments": {"name": "Ada"}},
            },
        ]
        stdin = "".join(json.dumps(r) + "\n" for r in requests)

        runner = CliRunner()
        result = runner.invoke(main, ["serve", "-m", "sample_commands"], input=stdin)

        assert result.exit_code == 0
        responses = {
            message["id"]: message
            for message in map(json.loads, result.stdout.splitlines())
        }
        assert set(responses) == {1, 2, 3}
        assert responses[1]["result"]["serverInfo"]["name"] == "toolbridge"
        assert "greet" in {t["name"] for t in responses[2]["result"]["tools"]}
        assert responses[3]["result"]["content"][0]["text"] == "Hello, Ada!"
