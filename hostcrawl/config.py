"""
Loading and validation of the hostcrawl configuration.
Pydantic describes the schema and checks the data.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

__all__ = ("CrawlerConfig", "load_config")


class CrawlerConfig(BaseModel):
    """Configuration for one crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_url: str = Field(..., min_length=1, description="Crawl root; also defines the in-scope host.")
    worker_count: int = Field(10, ge=1, description="Number of parallel workers.")
    request_timeout: float = Field(30.0, gt=0, description="Timeout for one request (seconds).")
    poll_interval: float = Field(0.1, gt=0, description="Completion detector polling period (seconds).")
    user_agent: str = Field("hostcrawl/0.1", min_length=1, description="User-Agent header.")
    registry_shards: int = Field(16, ge=1, description="Lock partitions of the visited set.")

    @field_validator("seed_url")
    def _canonical_seed(cls, v: str) -> str:
        # imported here: the crawler package imports this module
        from hostcrawl.crawler.registry import UrlRegistry

        return UrlRegistry(v, shards=1).seed_url


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def _read_file(path: Path) -> dict[str, Any]:
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path)
    if suffix == ".json":
        return _read_json(path)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(
    path: Union[str, Path, None] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> CrawlerConfig:
    """
    Read YAML or JSON, apply *overrides* and return a validated CrawlerConfig.

    An explicit *path* that does not exist raises FileNotFoundError. Without
    a path, ``configs/default.yaml`` is read when present. Override values
    that are ``None`` are ignored, so CLI options can be passed through as is.
    """
    data: dict[str, Any] = {}
    if path is None:
        if _DEFAULT_CFG.is_file():
            data = _read_file(_DEFAULT_CFG)
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))
        data = _read_file(path_obj)

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return CrawlerConfig(**data)
    except ValidationError:
        raise
