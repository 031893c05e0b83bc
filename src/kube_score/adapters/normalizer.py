"""Resource Normalizer: raw documents to canonical resources."""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import ValidationError

from kube_score.adapters.registry import AdapterRegistry
from kube_score.models.resources import CanonicalResource
from kube_score.utils.errors import DecodeError
from kube_score.utils.logging import get_logger

logger = get_logger("normalizer")


class Normalizer:
    """Decodes (apiVersion, kind, body) triples into canonical resources.

    Unrecognized kinds are not errors: they are logged and produce nothing.
    Bodies that do not fit the schema of a recognized kind raise DecodeError.

    Example:
        normalizer = Normalizer()
        resource = normalizer.decode("apps/v1", "Deployment", body)
    """

    def __init__(self, registry: AdapterRegistry | None = None, verbose: int = 0) -> None:
        self._registry = AdapterRegistry.with_defaults() if registry is None else registry
        self._verbose = verbose

    def decode(
        self,
        api_version: str,
        kind: str,
        body: Any,
        source: str | None = None,
    ) -> CanonicalResource | None:
        """Decode one document.

        Returns:
            The canonical resource, or None when the kind is not recognized

        Raises:
            DecodeError: If the body cannot be decoded
        """
        adapter = self._registry.get(api_version, kind)
        if adapter is None:
            if self._verbose:
                logger.info(f"Unknown datatype: {kind} ({api_version})")
            else:
                logger.debug(f"Unknown datatype: {kind} ({api_version})")
            return None

        if not isinstance(body, dict):
            raise DecodeError(kind, api_version, "document is not a mapping", source)

        try:
            return adapter.decode(body)
        except ValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(p) for p in first["loc"])
            raise DecodeError(kind, api_version, f"{location}: {first['msg']}", source) from e

    def decode_all(
        self,
        documents: Iterable[Any],
        abort_on_error: bool = True,
    ) -> list[CanonicalResource]:
        """Decode a batch, preserving order.

        Args:
            documents: RawDocument objects or (apiVersion, kind, body) tuples
            abort_on_error: Re-raise the first DecodeError instead of skipping the document

        Returns:
            Decoded resources in input order
        """
        resources: list[CanonicalResource] = []
        for document in documents:
            api_version, kind, body, source = _unpack(document)
            try:
                resource = self.decode(api_version, kind, body, source)
            except DecodeError as e:
                if abort_on_error:
                    raise
                logger.warning(f"Skipping document: {e.message}")
                continue
            if resource is not None:
                resources.append(resource)
        return resources


def _unpack(document: Any) -> tuple[str, str, Any, str | None]:
    if isinstance(document, tuple):
        if len(document) == 3:
            api_version, kind, body = document
            return api_version, kind, body, None
        api_version, kind, body, source = document
        return api_version, kind, body, source
    return document.api_version, document.kind, document.body, document.source
