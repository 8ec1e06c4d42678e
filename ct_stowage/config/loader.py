from __future__ import annotations

import json
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader for the CT stowage sorter.

Responsibilities:
- Load YAML config (default: config/ct_stowage.yml)
- Validate against the bundled JSON schema (config_schema.json)
- Apply defaults (output_sheet=CT_Sorted, preview_limit=10)
- Overlay environment variables (CT_FULL_LIST / CT_REPORT / CT_OUTPUT)
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"
DEFAULT_CONFIG_PATH = Path("config/ct_stowage.yml")

ENV_FULL_LIST = "CT_FULL_LIST"
ENV_REPORT = "CT_REPORT"
ENV_OUTPUT = "CT_OUTPUT"


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class SorterConfig:
    full_list: str | None = None  # FULL リスト (stowage 取得元)
    report: str | None = None  # CT モニタリングレポート
    output: str | None = None  # 出力 .xlsx (None なら書き出さない)
    output_sheet: str = "CT_Sorted"
    preview_limit: int = 10


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: schema file missing / not valid JSON, or the config data
            fails schema validation (unknown keys, wrong types).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> SorterConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config validation failed: top level must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    defaults = SorterConfig()
    return SorterConfig(
        full_list=data.get("full_list"),
        report=data.get("report"),
        output=data.get("output"),
        output_sheet=data.get("output_sheet", defaults.output_sheet),
        preview_limit=data.get("preview_limit", defaults.preview_limit),
    )


def apply_env_overrides(cfg: SorterConfig) -> SorterConfig:
    """Environment (incl. values loaded from .env) takes precedence over YAML."""
    return replace(
        cfg,
        full_list=os.getenv(ENV_FULL_LIST) or cfg.full_list,
        report=os.getenv(ENV_REPORT) or cfg.report,
        output=os.getenv(ENV_OUTPUT) or cfg.output,
    )
