from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RunnerConfig(BaseModel):
    """Settings for how test outcomes are printed and where runs are saved."""

    model_config = ConfigDict(extra="forbid")

    color: bool = True
    precision: int = Field(default=4, ge=0, le=10)
    output_dir: str = "runs"
    report: bool = True

    @field_validator("output_dir")
    @classmethod
    def output_dir_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("output_dir must not be empty")
        return v


def _expand(value: Any) -> Any:
    if isinstance(value, str):
        return expandvars(value, nounset=True)
    if isinstance(value, dict):
        return {k: _expand(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand(v) for v in value]
    return value


def load_config(path: Path) -> RunnerConfig:
    """Load and validate a runner config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")

    try:
        expanded = _expand(raw)
    except Exception as e:
        # expandvars raises its own UnboundVariable for ${VAR} without a default
        raise ValueError(f"{path}: {e}") from e

    config = RunnerConfig(**expanded)

    # Resolve a relative output_dir relative to the config file location
    output_path = Path(config.output_dir)
    if not output_path.is_absolute():
        config.output_dir = str((config_dir / output_path).resolve())

    return config
