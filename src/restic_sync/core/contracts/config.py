"""Configuration contracts."""

from __future__ import annotations

from urllib.parse import urlsplit

from pydantic import BaseModel, Field, field_validator, model_validator


def normalize_url(url: str) -> str:
    """Return *url* with exactly one trailing path separator appended when missing."""
    return url if url.endswith("/") else f"{url}/"


class SyncConfig(BaseModel):
    source: str
    dest: str
    prune: bool = False
    cron: str | None = None
    max_retries: int = Field(default=5, ge=0, le=20)
    timeout: float = Field(default=30.0, gt=0)

    model_config = {"frozen": True}

    @field_validator("source", "dest")
    @classmethod
    def validate_repository_url(cls, value: str) -> str:
        candidate = value.strip()
        parts = urlsplit(candidate)
        if parts.scheme not in {"http", "https"} or not parts.netloc:
            raise ValueError(f"repository URL must be an http(s) URL with a host: {value!r}")
        return normalize_url(candidate)

    @field_validator("cron")
    @classmethod
    def strip_cron(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = value.strip()
        return stripped or None

    @model_validator(mode="after")
    def validate_distinct_repositories(self) -> SyncConfig:
        if self.source == self.dest:
            raise ValueError("source and dest must be different repositories")
        return self
