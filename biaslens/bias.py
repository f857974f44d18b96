"""Client for the external bias-classification service.

The whole paragraph sequence goes out in one request::

    POST /api/analyze-bias
    {"paragraphs": [{"index": 0, "text": "..."}, ...]}

and the service answers with the flagged paragraphs only::

    [{"index": 0, "text": "...", "label": "...", "reason": "..."}, ...]

(a ``{"annotations": [...]}`` envelope is accepted too).  Indices are sent
explicitly so skipped elements upstream can never shift an annotation onto
the wrong block.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from biaslens import settings
from biaslens.items import AnnotatedArticle, AnnotatedBlock, Annotation, Article, ContentBlock

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = "Failed to reach bias analysis."
NO_BIAS_MESSAGE = "No obvious bias detected."

_annotations_adapter = TypeAdapter(list[Annotation])


# ---------------------------------------------------------------------------
# Public exception
# ---------------------------------------------------------------------------

class AnalysisUnavailable(RuntimeError):
    """Raised when the bias service cannot be reached or answers with an error.

    Attributes:
        service_url -- the endpoint that failed
        status      -- HTTP status code (0 if no response was received)
    """

    def __init__(self, message: str, service_url: str = "", status: int = 0) -> None:
        super().__init__(message)
        self.service_url = service_url
        self.status = status


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

def build_request(blocks: Iterable[ContentBlock]) -> dict[str, Any]:
    return {"paragraphs": [{"index": b.index, "text": b.text} for b in blocks]}


def parse_response(payload: Any) -> list[Annotation]:
    """Validate a decoded response body; raises ``ValidationError`` on bad shape."""
    if isinstance(payload, dict):
        payload = payload.get("annotations")
    return _annotations_adapter.validate_python(payload)


class BiasClient:
    """Send content blocks to the bias service in a single batched request.

    Args:
        service_url: Full URL of the ``analyze-bias`` endpoint.
        timeout:     Request timeout in seconds.  ``None`` (default) means no
                     timeout; callers that need one pass it explicitly.
        headers:     Extra request headers.
        client:      Pre-built ``httpx.AsyncClient`` to send through.  It is
                     used as-is and left open.
    """

    def __init__(
        self,
        service_url: str | None = None,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.service_url = service_url or settings.BIAS_SERVICE_URL
        self._timeout = timeout
        self._headers = {"User-Agent": settings.USER_AGENT, **(headers or {})}
        self._client = client

    async def classify(self, blocks: Sequence[ContentBlock]) -> list[Annotation]:
        """Return the service's annotations for *blocks*, exactly as received.

        An empty *blocks* sequence returns ``[]`` without contacting the
        service.

        Raises:
            AnalysisUnavailable: On transport errors, non-2xx responses, or a
                response body that is not a list of annotations.  Nothing
                is retried and no partial result is returned.
        """
        if not blocks:
            return []

        body = build_request(blocks)
        try:
            if self._client is not None:
                response = await self._post(self._client, body)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await self._post(client, body)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Bias service request to %s failed: %s", self.service_url, exc)
            raise AnalysisUnavailable(
                f"Bias service unreachable: {exc}", service_url=self.service_url,
            ) from exc

        if not response.is_success:
            logger.error(
                "Bias service error: %d %s", response.status_code, response.reason_phrase,
            )
            raise AnalysisUnavailable(
                f"Bias analysis failed: HTTP {response.status_code}",
                service_url=self.service_url,
                status=response.status_code,
            )

        try:
            annotations = parse_response(response.json())
        except (ValueError, ValidationError) as exc:
            logger.error("Bias service returned an unreadable body: %s", exc)
            raise AnalysisUnavailable(
                f"Bias analysis returned an invalid response: {exc}",
                service_url=self.service_url,
                status=response.status_code,
            ) from exc

        logger.info(
            "Bias service flagged %d of %d paragraphs", len(annotations), len(blocks),
        )
        return annotations

    async def _post(self, client: httpx.AsyncClient, body: dict[str, Any]) -> httpx.Response:
        return await client.post(
            self.service_url,
            json=body,
            headers=self._headers,
        )


# ---------------------------------------------------------------------------
# Pairing
# ---------------------------------------------------------------------------

def pair_annotations(article: Article, annotations: Iterable[Annotation]) -> AnnotatedArticle:
    """Merge *annotations* onto *article*'s blocks by ``index``.

    Annotations pointing at a missing block are dropped; when several share
    an index the first one wins.  Block order is left untouched.
    """
    by_index: dict[int, Annotation] = {}
    kept: list[Annotation] = []
    block_count = len(article.blocks)
    for ann in annotations:
        if not 0 <= ann.index < block_count:
            logger.debug("Dropping annotation with unmatched index %d", ann.index)
            continue
        if ann.index in by_index:
            logger.debug("Dropping duplicate annotation for index %d", ann.index)
            continue
        by_index[ann.index] = ann
        kept.append(ann)

    blocks = []
    for block in article.blocks:
        ann = by_index.get(block.index)
        blocks.append(
            AnnotatedBlock(
                index=block.index,
                kind=block.kind,
                text=block.text,
                label=ann.label if ann else None,
                reason=ann.reason if ann else None,
            ),
        )
    return AnnotatedArticle(
        metadata=article.metadata,
        blocks=tuple(blocks),
        annotations=tuple(kept),
        source=article.source,
    )
