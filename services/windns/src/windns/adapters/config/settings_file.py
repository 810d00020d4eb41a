from __future__ import annotations

import json
from pathlib import Path

import jsonschema
import yaml

from windns.adapters.errors import SettingsError
from windns.domain.json_types import JsonDict, as_json_dict

SCHEMA_PATH = Path(__file__).resolve().parent / "settings.schema.v1.json"


def load_settings_file(path: Path) -> JsonDict:
    try:
        raw: object = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise SettingsError(f"Could not read {path}", cause=e) from e
    if not isinstance(raw, dict):
        raise SettingsError(f"{path} must contain a mapping")
    return as_json_dict(raw)


def validate_settings_schema(data: JsonDict) -> list[str]:
    schema = as_json_dict(json.loads(SCHEMA_PATH.read_text(encoding="utf-8")))
    validator = jsonschema.Draft202012Validator(schema)
    return [
        error.message
        for error in sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    ]
