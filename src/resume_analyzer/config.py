"""Application configuration loaded from config.yaml."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from resume_analyzer.errors import ConfigurationError

API_KEY_ENV = "ANTHROPIC_API_KEY"


@dataclass(frozen=True)
class LLMConfig:
    model: str = "claude-haiku-4-5-20251001"
    temperature: float = 0.1
    max_tokens: int = 8192
    timeout: int = 60
    max_attempts: int = 1

    def __post_init__(self) -> None:
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"temperature must be between 0 and 1, got {self.temperature}")
        if not 1 <= self.timeout <= 600:
            raise ValueError(f"timeout must be between 1 and 600 seconds, got {self.timeout}")
        if not 1 <= self.max_attempts <= 5:
            raise ValueError(f"max_attempts must be between 1 and 5, got {self.max_attempts}")
        if self.max_tokens < 1:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")


@dataclass(frozen=True)
class UploadConfig:
    max_file_mb: int = 10

    def __post_init__(self) -> None:
        if not 1 <= self.max_file_mb <= 50:
            raise ValueError(f"max_file_mb must be between 1 and 50, got {self.max_file_mb}")

    @property
    def max_bytes(self) -> int:
        return self.max_file_mb * 1024 * 1024


@dataclass(frozen=True)
class ExportConfig:
    theme: str = "professional"  # unknown themes fall back to "professional"


@dataclass(frozen=True)
class AppConfig:
    llm: LLMConfig = field(default_factory=LLMConfig)
    upload: UploadConfig = field(default_factory=UploadConfig)
    export: ExportConfig = field(default_factory=ExportConfig)


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    return AppConfig(
        llm=LLMConfig(**raw.get("llm", {})),
        upload=UploadConfig(**raw.get("upload", {})),
        export=ExportConfig(**raw.get("export", {})),
    )


def resolve_api_key(api_key: str | None = None) -> str:
    """Return the Anthropic API key, or raise ConfigurationError when none is set."""
    key = api_key if api_key is not None else os.environ.get(API_KEY_ENV, "")
    key = key.strip()
    if not key:
        raise ConfigurationError(
            f"API key is missing. Set {API_KEY_ENV} in your environment configuration."
        )
    return key
