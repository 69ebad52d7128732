from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from .utils.io import read_structured

def _env_int(name: str) -> Optional[int]:
    val = os.getenv(name)
    if val in (None, ""):
        return None
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be an integer, got {val!r}") from None


def _section(payload: Mapping[str, Any], name: str) -> dict:
    value = payload.get(name)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"Config section '{name}' must be a mapping, got {type(value).__name__}")
    return dict(value)


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_dir: str = "logs"
    filename: str = "quizkey.log"
    structured: bool = False

    def file_path(self) -> Path:
        return Path(self.log_dir) / self.filename


@dataclass
class DeterminismConfig:
    seed: Optional[int] = None  # None = OS entropy


@dataclass
class SequenceConfig:
    max_repair_attempts: int = 100
    max_generations: int = 1000


@dataclass
class AppConfig:
    logging: LoggingConfig = None  # type: ignore[assignment]
    determinism: DeterminismConfig = None  # type: ignore[assignment]
    sequence: SequenceConfig = None  # type: ignore[assignment]

    @staticmethod
    def from_dict(payload: Mapping[str, Any]) -> "AppConfig":
        if not isinstance(payload, Mapping):
            raise ValueError(f"Config must be a mapping, got {type(payload).__name__}")
        cfg = AppConfig(
            logging=LoggingConfig(**_section(payload, "logging")),
            determinism=DeterminismConfig(**_section(payload, "determinism")),
            sequence=SequenceConfig(**_section(payload, "sequence")),
        )
        return cfg.apply_env()

    @staticmethod
    def from_json(path: str | Path) -> "AppConfig":
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        return AppConfig.from_dict(payload)

    @staticmethod
    def from_file(path: str | Path) -> "AppConfig":
        """Load a JSON or YAML config, picked by suffix.

        An empty file yields the defaults. Parse errors and non-mapping
        documents raise ``ValueError``.
        """
        try:
            payload = read_structured(path)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise ValueError(f"Failed to parse config file {path}: {e}") from e
        if payload is None:
            payload = {}
        return AppConfig.from_dict(payload)

    def apply_env(self) -> "AppConfig":
        """Apply QUIZKEY_SEED / QUIZKEY_LOG_LEVEL overrides in place."""
        seed = _env_int("QUIZKEY_SEED")
        if seed is not None:
            self.determinism.seed = seed
        level = os.getenv("QUIZKEY_LOG_LEVEL")
        if level:
            self.logging.level = level
        return self

    def to_json(self, path: str | Path) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with open(p, "w", encoding="utf-8") as f:
            json.dump({
                "logging": asdict(self.logging),
                "determinism": asdict(self.determinism),
                "sequence": asdict(self.sequence),
            }, f, indent=2, ensure_ascii=False)


# Provide safe defaults via a factory function for top-level config
def default_app_config() -> AppConfig:
    return AppConfig(
        logging=LoggingConfig(),
        determinism=DeterminismConfig(),
        sequence=SequenceConfig(),
    )
