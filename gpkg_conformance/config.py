from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import os
from pathlib import Path
import tomllib
from typing import cast
import warnings

from .constants import Defaults
from .domain.entities.requirement import EvaluationSettings


def _split_names(raw: str) -> tuple[str, ...]:
    return tuple(name.strip() for name in raw.split(",") if name.strip())


@dataclass(frozen=True, slots=True)
class ConformanceConfig:
    chunk_size: int = Defaults.CHUNK_SIZE
    sample_limit: int = Defaults.SAMPLE_LIMIT
    allowed_value_extensions: tuple[str, ...] = Defaults.ALLOWED_VALUE_EXTENSIONS
    report_dir: Path = field(default_factory=lambda: Path("."))

    def __post_init__(self) -> None:
        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.sample_limit < 1:
            raise ValueError(f"sample_limit must be positive, got {self.sample_limit}")

    @classmethod
    def from_env(cls) -> ConformanceConfig:
        raw_extensions = os.getenv("GPKG_ALLOWED_VALUE_EXTENSIONS")
        allowed = (
            _split_names(raw_extensions)
            if raw_extensions is not None
            else Defaults.ALLOWED_VALUE_EXTENSIONS
        )
        return cls(
            chunk_size=int(os.getenv("GPKG_CHUNK_SIZE", str(Defaults.CHUNK_SIZE))),
            sample_limit=int(
                os.getenv("GPKG_SAMPLE_LIMIT", str(Defaults.SAMPLE_LIMIT))
            ),
            allowed_value_extensions=allowed,
            report_dir=Path(os.getenv("GPKG_REPORT_DIR", ".")),
        )

    def evaluation_settings(self) -> EvaluationSettings:
        return EvaluationSettings(
            sample_limit=self.sample_limit,
            allowed_value_extensions=frozenset(self.allowed_value_extensions),
        )


class ConfigLoader:
    pass

    @staticmethod
    def load(config_file: Path | None = None) -> ConformanceConfig:
        config = ConformanceConfig.from_env()
        if config_file is None:
            config_file = Path(Defaults.CONFIG_FILE)
        if config_file.exists():
            try:
                config = ConfigLoader._load_from_toml(config_file, config)
            except Exception as e:
                warnings.warn(
                    f"Failed to load config from {config_file}: {e}", stacklevel=2
                )
        return config

    @staticmethod
    def _load_from_toml(
        config_file: Path, base_config: ConformanceConfig
    ) -> ConformanceConfig:
        with config_file.open("rb") as handle:
            data = tomllib.load(handle)
        paths = _get_table(data, "paths")
        run = _get_table(data, "run")
        report_dir = base_config.report_dir
        if value := paths.get("report_dir"):
            report_dir = Path(str(value))
        chunk_size = base_config.chunk_size
        if (value := run.get("chunk_size")) is not None:
            chunk_size = _coerce_int(value, key="run.chunk_size")
        sample_limit = base_config.sample_limit
        if (value := run.get("sample_limit")) is not None:
            sample_limit = _coerce_int(value, key="run.sample_limit")
        allowed = base_config.allowed_value_extensions
        if (value := run.get("allowed_value_extensions")) is not None:
            allowed = _coerce_names(value, key="run.allowed_value_extensions")
        return ConformanceConfig(
            chunk_size=chunk_size,
            sample_limit=sample_limit,
            allowed_value_extensions=allowed,
            report_dir=report_dir,
        )


def _get_table(data: Mapping[str, object], key: str) -> Mapping[str, object]:
    value = data.get(key)
    if isinstance(value, Mapping):
        return cast("Mapping[str, object]", value)
    return {}


def _coerce_int(value: object, *, key: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be an int, got bool")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        return int(value)
    raise ValueError(f"{key} must be int-like or string, got {type(value).__name__}")


def _coerce_names(value: object, *, key: str) -> tuple[str, ...]:
    if isinstance(value, str):
        return _split_names(value)
    if isinstance(value, list):
        return tuple(str(item).strip() for item in cast("list[object]", value))
    raise ValueError(f"{key} must be a list or string, got {type(value).__name__}")
