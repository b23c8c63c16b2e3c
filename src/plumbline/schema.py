"""Generate JSON Schema for the plumbline.yaml config format."""

from __future__ import annotations

import json
from pathlib import Path

from plumbline.config import RunnerConfig


def generate_json_schema() -> dict:
    schema = RunnerConfig.model_json_schema()
    schema["$schema"] = "https://json-schema.org/draft/2020-12/schema"
    schema["title"] = "plumbline config"
    return schema


def write_json_schema(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(generate_json_schema(), indent=2) + "\n")
