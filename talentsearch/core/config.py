"""Configuration models and YAML loader for the talent search service."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


class ElasticsearchConfig(BaseModel):
    """Connection and target index for the search engine."""

    url: str = "http://localhost:9200"
    index: str = "talents"
    request_timeout: float = Field(default=10.0, gt=0)

    @field_validator("index")
    @classmethod
    def index_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "index must not be empty"
            raise ValueError(msg)
        return v.strip()


class SearchPolicyConfig(BaseModel):
    """Result window and relevance cutoff applied to every search."""

    max_results: int = Field(default=1000, ge=1, le=10000)
    min_score: float = Field(default=0.9, ge=0.0)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    elasticsearch: ElasticsearchConfig = Field(default_factory=ElasticsearchConfig)
    search: SearchPolicyConfig = Field(default_factory=SearchPolicyConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
