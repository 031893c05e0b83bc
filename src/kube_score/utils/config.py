"""Configuration file support for kube-score."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from kube_score.utils.errors import ConfigurationError


class ScoreConfig(BaseModel):
    """Run configuration consumed by the scoring engine."""

    model_config = {"frozen": True}

    ignored_namespaces: frozenset[str] = Field(
        default_factory=frozenset,
        description="Namespaces whose resources get skipped AllOK outcomes",
    )
    enabled_optional_tests: frozenset[str] = Field(
        default_factory=frozenset,
        description="Optional check ids to turn on",
    )
    ignored_tests: frozenset[str] = Field(
        default_factory=frozenset,
        description="Check ids forced to Skipped",
    )
    verbose: int = Field(default=0, ge=0, description="Diagnostic verbosity")
    use_ignore_annotation: bool = Field(
        default=True,
        description="Honour the kube-score/ignore annotation on resources",
    )
    ignore_container_cpu_limit: bool = Field(
        default=False, description="Do not require a CPU limit"
    )
    ignore_container_memory_limit: bool = Field(
        default=False, description="Do not require a memory limit"
    )
    workers: int = Field(default=1, ge=1, description="Parallel scoring workers")

    def merged(self, **overrides: object) -> "ScoreConfig":
        """Return a copy with set-valued fields unioned and scalars replaced.

        ``None`` overrides are ignored so unset CLI flags keep file values.
        """
        update: dict[str, object] = {}
        for key, value in overrides.items():
            if value is None:
                continue
            current = getattr(self, key)
            if isinstance(current, frozenset):
                update[key] = current | frozenset(value)  # type: ignore[arg-type]
            else:
                update[key] = value
        return self.model_copy(update=update)


def get_config_paths() -> list[Path]:
    """Get possible configuration file paths.

    Returns:
        List of paths to check for configuration files
    """
    paths = [
        Path.cwd() / ".kube-score.yaml",
        Path.cwd() / ".kube-score.yml",
    ]

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / "kube-score" / "config.yaml")

    paths.append(Path.home() / ".config" / "kube-score" / "config.yaml")
    return paths


def load_config(config_path: Path | str | None = None) -> ScoreConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.

    Returns:
        Loaded configuration
    """
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            return _load_config_file(path)
        raise ConfigurationError(f"Config file not found: {config_path}")

    for path in get_config_paths():
        if path.exists():
            return _load_config_file(path)

    return ScoreConfig()


def _load_config_file(path: Path) -> ScoreConfig:
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}")

    if data is None:
        return ScoreConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    try:
        return ScoreConfig.model_validate(data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        key = ".".join(str(p) for p in first["loc"])
        raise ConfigurationError(f"Invalid config file {path}: {first['msg']}", config_key=key)
