"""Utility functions for kube-score."""

from kube_score.utils.logging import configure_logging, get_logger, get_logger_with_context, level_for
from kube_score.utils.errors import (
    KubeScoreError,
    DecodeError,
    SelectorSyntaxError,
    LoadError,
    ConfigurationError,
)
from kube_score.utils.config import ScoreConfig, get_config_paths, load_config

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    "level_for",
    # Errors
    "KubeScoreError",
    "DecodeError",
    "SelectorSyntaxError",
    "LoadError",
    "ConfigurationError",
    # Config
    "ScoreConfig",
    "get_config_paths",
    "load_config",
]
