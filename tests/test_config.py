"""Tests for history_grouper/config.py"""

import dataclasses
import logging

import pytest
import yaml

from history_grouper.config import LOG_LEVELS, Config, load_config, load_yaml_config

ENV_VARS = (
    "HISTORY_FILE", "HISTORY_OUTPUT_FILE", "HISTORY_INDENT",
    "HISTORY_REPORT_FORMAT", "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestConfigDefaults:
    def test_defaults(self):
        cfg = Config()
        assert cfg.history_file == "history.jsonl"
        assert cfg.output_file == "groupped-history.json"
        assert cfg.indent == 2
        assert cfg.exclude_fields == ("project", "pastedContents")
        assert cfg.log_level == "INFO"
        assert cfg.report_format == "text"

    def test_frozen(self):
        cfg = Config()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.indent = 4

    def test_log_levels(self):
        assert LOG_LEVELS == ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class TestLoadYamlConfig:
    def test_no_path(self):
        assert load_yaml_config(None) == {}
        assert load_yaml_config("") == {}

    def test_loads_mapping(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text(yaml.dump({"output_file": "out.json", "indent": 4}))
        assert load_yaml_config(str(path)) == {"output_file": "out.json", "indent": 4}

    def test_missing_file_warns(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            assert load_yaml_config(str(tmp_path / "missing.yml")) == {}
        assert "not found" in caplog.text

    def test_invalid_yaml_warns(self, tmp_path, caplog):
        path = tmp_path / "config.yml"
        path.write_text("key: [unclosed\n")
        with caplog.at_level(logging.WARNING):
            assert load_yaml_config(str(path)) == {}
        assert "Invalid YAML" in caplog.text

    def test_unreadable_path_warns(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            assert load_yaml_config(str(tmp_path)) == {}
        assert "unreadable" in caplog.text

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("")
        assert load_yaml_config(str(path)) == {}

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yml"
        path.write_text("- a\n- b\n")
        assert load_yaml_config(str(path)) == {}


class TestLoadConfig:
    def test_defaults_without_env(self):
        assert load_config() == Config()

    def test_yaml_overrides_defaults(self):
        cfg = load_config({
            "history_file": "in.jsonl",
            "output_file": "out.json",
            "indent": 4,
            "log_level": "debug",
            "report_format": "JSON",
        })
        assert cfg.history_file == "in.jsonl"
        assert cfg.output_file == "out.json"
        assert cfg.indent == 4
        assert cfg.log_level == "DEBUG"
        assert cfg.report_format == "json"

    def test_env_overrides_yaml(self, monkeypatch):
        monkeypatch.setenv("HISTORY_FILE", "/data/history.jsonl")
        monkeypatch.setenv("HISTORY_OUTPUT_FILE", "/data/grouped.json")
        monkeypatch.setenv("HISTORY_INDENT", "0")
        monkeypatch.setenv("LOG_LEVEL", "warning")
        cfg = load_config({"history_file": "ignored.jsonl", "indent": 8})
        assert cfg.history_file == "/data/history.jsonl"
        assert cfg.output_file == "/data/grouped.json"
        assert cfg.indent == 0
        assert cfg.log_level == "WARNING"

    def test_exclude_fields_from_yaml(self):
        cfg = load_config({"exclude_fields": ["project", "pastedContents", "display"]})
        assert cfg.exclude_fields == ("project", "pastedContents", "display")

    def test_project_always_excluded(self):
        cfg = load_config({"exclude_fields": ["display"]})
        assert cfg.exclude_fields == ("project", "display")

    def test_empty_exclude_list_uses_default(self):
        assert load_config({"exclude_fields": []}).exclude_fields == ("project", "pastedContents")

    def test_bad_indent_raises(self, monkeypatch):
        monkeypatch.setenv("HISTORY_INDENT", "two")
        with pytest.raises(ValueError):
            load_config()

    @pytest.mark.parametrize("value", [None, [2], {"n": 2}, True, "2.5"])
    def test_bad_yaml_indent_raises_value_error(self, value):
        with pytest.raises(ValueError, match="indent must be an integer"):
            load_config({"indent": value})

    def test_indent_from_yaml_string(self):
        assert load_config({"indent": "4"}).indent == 4

    def test_exclude_fields_string_raises(self):
        with pytest.raises(ValueError, match="exclude_fields must be a list"):
            load_config({"exclude_fields": "display"})

    @pytest.mark.parametrize("key", ["history_file", "output_file"])
    @pytest.mark.parametrize("value", [5, None, ["a.jsonl"], ""])
    def test_bad_path_raises_value_error(self, key, value):
        with pytest.raises(ValueError, match=f"{key} must be a non-empty string"):
            load_config({key: value})

    def test_bad_report_format_raises(self):
        with pytest.raises(ValueError, match="report format"):
            load_config({"report_format": "xml"})

    def test_bad_log_level_raises(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ValueError, match="log level"):
            load_config()
