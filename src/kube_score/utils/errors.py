"""Error types for kube-score."""

from __future__ import annotations

from typing import Any


class KubeScoreError(Exception):
    """Base exception for kube-score."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class DecodeError(KubeScoreError):
    """A document of a known kind could not be decoded into its model."""

    def __init__(self, kind: str, api_version: str, reason: str, source: str | None = None):
        location = f" in {source}" if source else ""
        super().__init__(
            f"Failed to decode {kind} ({api_version}){location}: {reason}",
            code="DECODE_ERROR",
            details={"kind": kind, "api_version": api_version, "source": source},
        )
        self.kind = kind
        self.api_version = api_version
        self.source = source


class SelectorSyntaxError(KubeScoreError):
    """A label selector could not be compiled."""

    def __init__(self, message: str, key: str | None = None):
        details = {"key": key} if key else {}
        super().__init__(message, code="SELECTOR_ERROR", details=details)


class LoadError(KubeScoreError):
    """A manifest file could not be read or parsed."""

    def __init__(self, message: str, source: str | None = None):
        details = {"source": source} if source else {}
        super().__init__(message, code="LOAD_ERROR", details=details)


class ConfigurationError(KubeScoreError):
    """Configuration error."""

    def __init__(self, message: str, config_key: str | None = None):
        details = {"config_key": config_key} if config_key else {}
        super().__init__(message, code="CONFIG_ERROR", details=details)
