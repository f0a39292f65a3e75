"""Tests for the CLI commands."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from openrouter_context import __version__
from openrouter_context.cli import commands
from openrouter_context.cli.commands import app
from openrouter_context.context.estimator import TokenEstimator

runner = CliRunner()


@pytest.fixture
def conversation_file(tmp_path: Path) -> Path:
    path = tmp_path / "conversation.json"
    path.write_text(json.dumps([
        {"role": "system", "content": "You are helpful."},
        {"role": "user", "content": "Hi"},
        {"role": "assistant", "content": "Hello!"},
        {"role": "user", "content": "Tell me a long story about dragons and castles and kingdoms..."},
        {"role": "assistant", "content": "Once upon a time..."},
    ]))
    return path


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestEstimate:
    def test_total(self, conversation_file: Path):
        result = runner.invoke(app, ["estimate", str(conversation_file)])
        assert result.exit_code == 0
        assert "Total: 53 tokens across 5 messages" in result.output

    def test_missing_file(self, tmp_path: Path):
        result = runner.invoke(app, ["estimate", str(tmp_path / "missing.json")])
        assert result.exit_code == 1

    def test_not_a_list(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"role": "user"}))
        result = runner.invoke(app, ["estimate", str(path)])
        assert result.exit_code == 1

    def test_multi_part_content(self, tmp_path: Path):
        path = tmp_path / "parts.json"
        path.write_text(json.dumps([{
            "role": "user",
            "content": [
                {"type": "text", "text": "abcd"},
                {"type": "image_url", "image_url": {"url": "x"}},
                {"type": "text", "text": "efg"},
            ],
        }]))
        result = runner.invoke(app, ["estimate", str(path)])
        assert result.exit_code == 0
        # "abcd efg" is 8 chars: 2 tokens plus overhead.
        assert "Total: 7 tokens across 1 messages" in result.output

    def test_tiktoken_rows_use_chosen_estimator(self, conversation_file: Path, monkeypatch):
        class FixedEstimator(TokenEstimator):
            def estimate(self, messages):
                return 777 * len(messages)

        monkeypatch.setattr(commands, "TiktokenEstimator", FixedEstimator)
        result = runner.invoke(app, ["estimate", str(conversation_file), "--tiktoken"])

        assert result.exit_code == 0
        assert result.output.count("777") == 5
        assert "Total: 3885 tokens across 5 messages" in result.output


class TestFit:
    def test_truncation(self, conversation_file: Path, tmp_path: Path):
        output = tmp_path / "out.json"
        result = runner.invoke(app, [
            "fit", str(conversation_file),
            "--strategy", "truncation",
            "--budget", "40",
            "--config", str(tmp_path / "none.json"),
            "--output", str(output),
        ])
        assert result.exit_code == 0
        assert [m["content"] for m in json.loads(output.read_text())] == [
            "You are helpful.",
            "Hi",
            "Once upon a time...",
        ]

    def test_sliding_window(self, conversation_file: Path, tmp_path: Path):
        output = tmp_path / "out.json"
        result = runner.invoke(app, [
            "fit", str(conversation_file),
            "--strategy", "sliding_window",
            "--budget", "10",
            "--window-size", "2",
            "--no-keep-first",
            "--config", str(tmp_path / "none.json"),
            "--output", str(output),
        ])
        assert result.exit_code == 0
        assert [m["role"] for m in json.loads(output.read_text())] == ["user", "assistant"]

    def test_unknown_strategy(self, conversation_file: Path, tmp_path: Path):
        result = runner.invoke(app, [
            "fit", str(conversation_file),
            "--strategy", "random",
            "--config", str(tmp_path / "none.json"),
        ])
        assert result.exit_code == 1

    def test_invalid_budget(self, conversation_file: Path, tmp_path: Path):
        result = runner.invoke(app, [
            "fit", str(conversation_file),
            "--budget", "0",
            "--config", str(tmp_path / "none.json"),
        ])
        assert result.exit_code == 1
