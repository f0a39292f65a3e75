"""Tests for configuration loading and key conversion."""

import json
from pathlib import Path

from openrouter_context.config.loader import (
    camel_to_snake,
    convert_keys,
    convert_to_camel,
    load_config,
    save_config,
    snake_to_camel,
)
from openrouter_context.config.schema import Config


# ── Key conversion ──────────────────────────────────────────────────


class TestCamelToSnake:
    def test_simple(self):
        assert camel_to_snake("apiKey") == "api_key"

    def test_multiple_words(self):
        assert camel_to_snake("maxContextTokens") == "max_context_tokens"

    def test_single_word(self):
        assert camel_to_snake("strict") == "strict"

    def test_already_snake(self):
        assert camel_to_snake("api_key") == "api_key"

    def test_empty(self):
        assert camel_to_snake("") == ""


class TestSnakeToCamel:
    def test_simple(self):
        assert snake_to_camel("api_key") == "apiKey"

    def test_multiple_words(self):
        assert snake_to_camel("max_context_tokens") == "maxContextTokens"

    def test_single_word(self):
        assert snake_to_camel("strategy") == "strategy"

    def test_empty(self):
        assert snake_to_camel("") == ""


class TestConvertKeys:
    def test_nested_dict(self):
        data = {"context": {"windowSize": 4, "keepFirst": False}}
        assert convert_keys(data) == {"context": {"window_size": 4, "keep_first": False}}

    def test_list_of_dicts(self):
        data = {"items": [{"roleName": "user"}]}
        assert convert_keys(data) == {"items": [{"role_name": "user"}]}

    def test_non_dict(self):
        assert convert_keys("hello") == "hello"
        assert convert_keys(42) == 42
        assert convert_keys(None) is None

    def test_roundtrip(self):
        original = {"apiKey": "test", "httpReferer": "http://x", "recentCount": 2}
        assert convert_to_camel(convert_keys(original)) == original


# ── Config load/save ────────────────────────────────────────────────


class TestLoadConfig:
    def test_default_when_no_file(self, tmp_path: Path):
        config = load_config(tmp_path / "nonexistent.json")
        assert isinstance(config, Config)
        assert config.context.strategy == "truncation"

    def test_load_camel_case_json(self, tmp_path: Path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({
            "provider": {"apiKey": "sk-or-test", "defaultModel": "openai/gpt-4o"},
            "context": {
                "strategy": "sliding_window",
                "maxContextTokens": 4096,
                "windowSize": 6,
            },
        }))
        config = load_config(config_file)
        assert config.provider.api_key == "sk-or-test"
        assert config.provider.default_model == "openai/gpt-4o"
        assert config.context.strategy == "sliding_window"
        assert config.context.max_context_tokens == 4096
        assert config.context.window_size == 6

    def test_invalid_json_returns_default(self, tmp_path: Path):
        config_file = tmp_path / "config.json"
        config_file.write_text("not json{{{")
        config = load_config(config_file)
        assert config.context.max_context_tokens == 8000

    def test_invalid_values_return_default(self, tmp_path: Path):
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"context": {"maxContextTokens": 0}}))
        config = load_config(config_file)
        assert config.context.max_context_tokens == 8000

    def test_empty_file_returns_default(self, tmp_path: Path):
        config_file = tmp_path / "config.json"
        config_file.write_text("")
        assert isinstance(load_config(config_file), Config)


class TestSaveConfig:
    def test_save_creates_file(self, tmp_path: Path):
        config_file = tmp_path / "subdir" / "config.json"
        save_config(Config(), config_file)
        assert config_file.exists()

    def test_save_uses_camel_case(self, tmp_path: Path):
        config_file = tmp_path / "config.json"
        save_config(Config(), config_file)

        data = json.loads(config_file.read_text())
        assert "maxContextTokens" in data["context"]
        assert "apiKey" in data["provider"]

    def test_roundtrip(self, tmp_path: Path):
        original = Config()
        original.context.strategy = "summary"
        original.context.recent_count = 6
        original.provider.api_key = "sk-or-roundtrip"

        config_file = tmp_path / "config.json"
        save_config(original, config_file)
        loaded = load_config(config_file)

        assert loaded.context.strategy == "summary"
        assert loaded.context.recent_count == 6
        assert loaded.provider.api_key == "sk-or-roundtrip"
