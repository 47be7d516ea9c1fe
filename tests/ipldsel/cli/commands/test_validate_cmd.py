"""Tests for ipldsel.cli.commands.validate_cmd module."""

import json

import pytest
from typer.testing import CliRunner

from ipldsel.cli.main import app
from ipldsel.stdlib.adapters.codecs import create_block


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def query(tmp_path):
    path = tmp_path / "q.json"
    path.write_text(
        json.dumps(
            {
                "cidRootedSelector": {
                    "root": str(create_block({"name": "root"}).cid),
                    "selectors": [
                        {"selectPath": "entries"},
                        {"selectRecursive": {"follow": [{"selectPath": "next"}], "depthLimit": 2}},
                    ],
                }
            }
        )
    )
    return path


class TestValidateCommand:
    def test_valid_document(self, runner, query) -> None:
        result = runner.invoke(app, ["validate", str(query)])

        assert result.exit_code == 0, result.output
        assert "Validation successful" in result.output

    def test_explain(self, runner, query) -> None:
        result = runner.invoke(app, ["validate", str(query), "--explain"])

        assert result.exit_code == 0, result.output
        assert "selectPath" in result.output
        assert "selectRecursive" in result.output

    def test_invalid_document(self, runner, tmp_path) -> None:
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"cidRootedSelector": {"root": "nope"}, "extra": {}}))

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Validation failed" in result.output

    def test_nothing_is_fetched(self, runner, query, monkeypatch) -> None:
        monkeypatch.setenv("IPLDSEL_STORE_PATH", "/definitely/not/a/directory")

        result = runner.invoke(app, ["validate", str(query)])

        assert result.exit_code == 0

    def test_missing_file(self, runner, tmp_path) -> None:
        result = runner.invoke(app, ["validate", str(tmp_path / "missing.json")])

        assert result.exit_code != 0
