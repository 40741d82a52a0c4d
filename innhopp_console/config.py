"""Runtime configuration for the innhopp console.

Every setting can be overridden with an ``INNHOPP_CONSOLE_<NAME>`` environment
variable; values are read once at import.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "INNHOPP_CONSOLE_"


def _env(name: str, default: str) -> str:
    return os.environ.get(f"{ENV_PREFIX}{name}", default)


def _env_int(name: str, default: int) -> int:
    return int(_env(name, str(default)))


@dataclass(frozen=True)
class StoragePaths:
    """Where uploaded event dumps and generated CSV files are kept."""

    uploads: Path
    outputs: Path

    @classmethod
    def from_env(cls) -> "StoragePaths":
        return cls(uploads=Path(_env("UPLOADS", "uploads")), outputs=Path(_env("OUTPUTS", "outputs")))

    def ensure(self) -> None:
        self.uploads.mkdir(parents=True, exist_ok=True)
        self.outputs.mkdir(parents=True, exist_ok=True)


@dataclass(frozen=True)
class AppConfig:
    max_upload_size_mb: int = 10
    allowed_upload_extensions: tuple[str, ...] = ("json",)
    # "auto" sniffs the dump's encoding with chardet
    events_encoding: str = "auto"

    @classmethod
    def from_env(cls) -> "AppConfig":
        return cls(
            max_upload_size_mb=_env_int("MAX_UPLOAD_MB", cls.max_upload_size_mb),
            events_encoding=_env("EVENTS_ENCODING", cls.events_encoding),
        )

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024


@dataclass(frozen=True)
class QueueConfig:
    """Redis connection and RQ queue used for export jobs."""

    redis_url: str = "redis://localhost:6379/0"
    queue_name: str = "innhopp-console"
    default_timeout: int = 60 * 5  # seconds

    @classmethod
    def from_env(cls) -> "QueueConfig":
        return cls(
            redis_url=_env("REDIS_URL", cls.redis_url),
            queue_name=_env("QUEUE", cls.queue_name),
            default_timeout=_env_int("QUEUE_TIMEOUT", cls.default_timeout),
        )


APP_CONFIG = AppConfig.from_env()
STORAGE_PATHS = StoragePaths.from_env()
QUEUE_CONFIG = QueueConfig.from_env()

STORAGE_PATHS.ensure()
