"""Configuration loading from env vars and an optional YAML file."""

import os
import logging
from dataclasses import dataclass

import yaml

from history_grouper.filters import EXCLUDED_FIELDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    history_file: str = "history.jsonl"
    output_file: str = "groupped-history.json"
    indent: int = 2
    exclude_fields: tuple[str, ...] = EXCLUDED_FIELDS
    log_level: str = "INFO"
    report_format: str = "text"


REPORT_FORMATS = ("text", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_yaml_config(path: str | None) -> dict:
    """Load overrides from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except OSError as e:
        logger.warning("Config file %s unreadable, using defaults: %s", path, e)
        return {}
    except yaml.YAMLError as e:
        logger.warning("Invalid YAML in %s, using defaults: %s", path, e)
        return {}

    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    return data


def _int_setting(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


def _str_setting(name: str, value) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string, got {value!r}")
    return value


def _exclude_fields(raw) -> tuple[str, ...]:
    if raw is None:
        return EXCLUDED_FIELDS
    if not isinstance(raw, list):
        raise ValueError(f"exclude_fields must be a list of field names, got {raw!r}")
    if not raw:
        return EXCLUDED_FIELDS
    fields = [str(name) for name in raw]
    # project is the bucket key and never stays on a cleaned record
    if "project" not in fields:
        fields.insert(0, "project")
    return tuple(fields)


def load_config(yaml_data: dict | None = None) -> Config:
    """Build Config: env vars win over YAML data, YAML wins over defaults."""
    yaml_data = yaml_data or {}
    report_format = str(
        os.environ.get("HISTORY_REPORT_FORMAT", yaml_data.get("report_format", Config.report_format))
    ).lower()
    if report_format not in REPORT_FORMATS:
        raise ValueError(
            f"Unknown report format {report_format!r}, expected one of {REPORT_FORMATS}"
        )
    log_level = str(
        os.environ.get("LOG_LEVEL", yaml_data.get("log_level", Config.log_level))
    ).upper()
    if log_level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {log_level!r}, expected one of {LOG_LEVELS}")

    return Config(
        history_file=_str_setting("history_file", os.environ.get(
            "HISTORY_FILE", yaml_data.get("history_file", Config.history_file)
        )),
        output_file=_str_setting("output_file", os.environ.get(
            "HISTORY_OUTPUT_FILE", yaml_data.get("output_file", Config.output_file)
        )),
        indent=_int_setting(
            "indent", os.environ.get("HISTORY_INDENT", yaml_data.get("indent", Config.indent))
        ),
        exclude_fields=_exclude_fields(yaml_data.get("exclude_fields")),
        log_level=log_level,
        report_format=report_format,
    )
