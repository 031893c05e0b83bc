"""Manifest loading: files to (apiVersion, kind, body) documents."""

from __future__ import annotations

from pathlib import Path
from typing import IO, Any, Iterable, Iterator

import yaml
from pydantic import BaseModel, Field

from kube_score.utils.errors import LoadError
from kube_score.utils.logging import get_logger

logger = get_logger("loader")


class RawDocument(BaseModel):
    """One document of a manifest file, with its detected type."""

    model_config = {"frozen": True}

    api_version: str = Field(description="Detected apiVersion")
    kind: str = Field(description="Detected kind")
    body: dict[str, Any] = Field(description="The full parsed document")
    source: str | None = Field(default=None, description="Where the document came from")


def parse_documents(text: str, source: str | None = None) -> list[RawDocument]:
    """Split a multi-document YAML string into RawDocuments.

    Empty documents are dropped. ``List`` documents are expanded into their
    items.

    Raises:
        LoadError: If the YAML is invalid or a document is not a mapping
    """
    text = text.replace("\r\n", "\n")

    try:
        parsed = list(yaml.safe_load_all(text))
    except yaml.YAMLError as e:
        raise LoadError(f"Invalid YAML in {source or '<stream>'}: {e}", source=source)

    documents: list[RawDocument] = []
    for position, data in enumerate(parsed):
        if data is None:
            continue
        if not isinstance(data, dict):
            raise LoadError(
                f"Document {position} in {source or '<stream>'} is not a mapping",
                source=source,
            )
        documents.extend(_expand(data, source))

    logger.debug(f"Loaded {len(documents)} documents from {source or '<stream>'}")
    return documents


def _expand(data: dict[str, Any], source: str | None) -> Iterator[RawDocument]:
    kind = str(data.get("kind") or "")
    if kind == "List" or (kind.endswith("List") and isinstance(data.get("items"), list)):
        for item in data.get("items") or []:
            if isinstance(item, dict):
                yield from _expand(item, source)
        return

    yield RawDocument(
        api_version=str(data.get("apiVersion") or ""),
        kind=kind,
        body=data,
        source=source,
    )


def load_file(path: Path | str) -> list[RawDocument]:
    """Read and parse one manifest file ("-" reads stdin).

    Raises:
        LoadError: If the file cannot be read or parsed
    """
    if str(path) == "-":
        import sys

        return load_stream(sys.stdin, source="<stdin>")

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise LoadError(f"Failed to read {path}: {e}", source=str(path))
    return parse_documents(text, source=str(path))


def load_stream(stream: IO[str], source: str | None = None) -> list[RawDocument]:
    return parse_documents(stream.read(), source=source)


def load_files(paths: Iterable[Path | str]) -> list[RawDocument]:
    """Load several files, preserving file and document order."""
    documents: list[RawDocument] = []
    for path in paths:
        documents.extend(load_file(path))
    return documents
