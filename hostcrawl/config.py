# === FILE: hostcrawl/config.py ===
"""
Loading and validation of hostcrawl configuration.
Pydantic describes the schema and checks the data; YAML and JSON files are accepted.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from hostcrawl import __version__
from hostcrawl.crawler.models import InvalidURLError
from hostcrawl.utils import parse_seed

DEFAULT_CONCURRENCY = 25


class CrawlerConfig(BaseModel):
    """Settings for a single crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_url: Optional[str] = Field(None, description="Starting URL; the CLI argument overrides it.")
    concurrency: int = Field(DEFAULT_CONCURRENCY, ge=1, description="Number of concurrent fetch workers.")
    timeout: float = Field(10.0, gt=0, description="Total timeout of one page request (seconds).")
    user_agent: str = Field(f"hostcrawl/{__version__}", min_length=1, description="User-Agent header.")
    max_body_bytes: Optional[int] = Field(None, ge=1, description="Bytes read per page at most; None reads all.")

    @field_validator("seed_url", mode="before")
    def _check_seed(cls, v: Any) -> Any:
        if v is None:
            return v
        if not isinstance(v, str):
            raise ValueError("seed_url must be a string")
        try:
            parse_seed(v)
        except InvalidURLError as exc:
            raise ValueError(str(exc)) from exc
        return v.strip()


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


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Read YAML or JSON and return a validated CrawlerConfig.

    With ``path=None`` the default ``configs/default.yaml`` is used when it
    exists, otherwise the built-in defaults. An explicit path that does not
    exist raises FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.is_file():
            return CrawlerConfig()
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

    return CrawlerConfig(**data)


__all__ = ["CrawlerConfig", "DEFAULT_CONCURRENCY", "load_config"]
