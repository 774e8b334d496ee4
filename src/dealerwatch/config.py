"""
DealerWatch Configuration

Settings are read once from DW_* environment variables and passed
explicitly to the directory factory, the service and the CLI.

    DW_GENERATION_MODE   seeded | random        (default: seeded)
    DW_DIRECTORY_SEED    integer seed           (default: 20260205)
    DW_DEALER_COUNT      generated dealers      (default: 200)
    DW_LOG_LEVEL         logging level name     (default: INFO)
    DW_LOG_FORMAT        json | text            (default: json)
    DW_DOCS_ENABLED      true | false           (default: true)
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import ConfigurationError
from .models.enums import GenerationMode


DEFAULT_DIRECTORY_SEED = 20260205
DEFAULT_DEALER_COUNT = 200

_LOG_FORMATS = ("json", "text")


@dataclass(frozen=True)
class Settings:
    """
    Runtime settings for DealerWatch.

    Attributes:
        generation_mode: How dealer score/RAG/trend are drawn
        directory_seed: Seed used in SEEDED mode
        dealer_count: Number of generated dealers (excludes the four real dealers)
        log_level: Logging level name
        log_format: "json" for structured logs, "text" for plain
        docs_enabled: Serve OpenAPI docs from the service
    """
    generation_mode: GenerationMode = GenerationMode.SEEDED
    directory_seed: int = DEFAULT_DIRECTORY_SEED
    dealer_count: int = DEFAULT_DEALER_COUNT
    log_level: str = "INFO"
    log_format: str = "json"
    docs_enabled: bool = True

    def __post_init__(self) -> None:
        if self.dealer_count < 0:
            raise ConfigurationError(
                message="dealer_count must be non-negative",
                details={"dealer_count": self.dealer_count},
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigurationError(
                message=f"Unknown log level: {self.log_level}",
                details={"log_level": self.log_level},
            )
        if self.log_format not in _LOG_FORMATS:
            raise ConfigurationError(
                message=f"Unknown log format: {self.log_format}",
                details={"log_format": self.log_format, "allowed": list(_LOG_FORMATS)},
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            ConfigurationError: If a variable has an invalid value
        """
        env = os.environ if environ is None else environ

        raw_mode = env.get("DW_GENERATION_MODE", GenerationMode.SEEDED.value).lower()
        try:
            mode = GenerationMode(raw_mode)
        except ValueError:
            raise ConfigurationError(
                message=f"Unknown generation mode: {raw_mode}",
                details={"allowed": [m.value for m in GenerationMode]},
            )

        return cls(
            generation_mode=mode,
            directory_seed=_int_var(env, "DW_DIRECTORY_SEED", DEFAULT_DIRECTORY_SEED),
            dealer_count=_int_var(env, "DW_DEALER_COUNT", DEFAULT_DEALER_COUNT),
            log_level=env.get("DW_LOG_LEVEL", "INFO"),
            log_format=env.get("DW_LOG_FORMAT", "json").lower(),
            docs_enabled=env.get("DW_DOCS_ENABLED", "true").lower() == "true",
        )


def _int_var(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(
            message=f"{name} must be an integer",
            details={"variable": name, "value": raw},
        )
