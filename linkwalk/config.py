# === FILE: linkwalk/config.py ===
"""
Loading and validation of LinkWalk run configuration.
The schema is described and checked with Pydantic.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class WalkConfig(BaseModel):
    """Configuration for a single walk."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    root: str = Field(..., min_length=1, description="Node id the walk starts from.")
    max_depth: int = Field(4, ge=0, description="Link-following budget; 0 fetches nothing.")
    fetcher: Literal["fixture", "http"] = Field("fixture", description="Fetcher backend.")
    graph: Optional[Path] = Field(None, description="Graph fixture file for the fixture backend.")
    timeout: float = Field(10.0, gt=0, description="Per-request timeout for HTTP (seconds).")
    user_agent: str = Field("LinkWalk/1.0", min_length=1, description="User-Agent header.")
    same_host: bool = Field(True, description="HTTP: follow links on the page's host only.")
    max_concurrency: Optional[int] = Field(None, ge=1, description="Cap on in-flight fetches.")

    @field_validator("root", mode="before")
    def _strip_root(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("graph", mode="after")
    def _check_graph_exists(cls, v: Optional[Path]) -> Optional[Path]:
        if v is not None and not v.expanduser().is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(v))
        return v


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Malformed YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Malformed JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> WalkConfig:
    """
    Read YAML or JSON and return a validated WalkConfig.
    Raises FileNotFoundError when the file (or its graph fixture) is missing.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(_DEFAULT_CFG))
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return WalkConfig(**data)


__all__ = ["WalkConfig", "load_config", "ValidationError"]
