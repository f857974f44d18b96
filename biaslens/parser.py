"""biaslens.parser: high-level BiasLens class.

Bundles the bias-service configuration and both parse/analyze workflows
into a single reusable object.

Usage::

    from biaslens import BiasLens

    lens = BiasLens()
    article = lens.parse(html, url="https://www.theguardian.com/world/2025/nov/17/story")

    # One blocking call, e.g. from a script
    annotated = lens.analyze_sync(html, "guardian")

    # From async code
    annotated = await lens.analyze(html, "guardian")
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from biaslens import settings
from biaslens.bias import BiasClient
from biaslens.query import analyze as _analyze
from biaslens.query import parse as _parse

if TYPE_CHECKING:
    from bs4 import BeautifulSoup

    from biaslens.items import AnnotatedArticle, Article


class BiasLens:
    """High-level extractor with a configured bias-service client.

    All parameters are optional; ``BiasLens()`` uses the values from
    :mod:`biaslens.settings`.

    Args:
        service_url: Bias service endpoint (default ``settings.BIAS_SERVICE_URL``).
        timeout:     Seconds to wait for the bias service; ``None`` waits
                     indefinitely (default ``settings.REQUEST_TIMEOUT``).
        client:      Pre-configured :class:`~biaslens.bias.BiasClient`;
                     overrides *service_url* and *timeout*.
    """

    def __init__(
        self,
        service_url: str | None = None,
        timeout: float | None = None,
        client: BiasClient | None = None,
    ) -> None:
        self._service_url = service_url or settings.BIAS_SERVICE_URL
        self._timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self._client = client or BiasClient(self._service_url, timeout=self._timeout)

    # ------------------------------------------------------------------
    # Public methods
    # ------------------------------------------------------------------

    def parse(
        self,
        document: str | BeautifulSoup,
        source: str | None = None,
        url: str = "",
    ) -> Article:
        """Extract an article without any network calls."""
        return _parse(document, source, url=url)

    async def analyze(
        self,
        document: str | BeautifulSoup,
        source: str | None = None,
        url: str = "",
    ) -> AnnotatedArticle:
        """Extract an article and annotate it with the configured bias service.

        Raises:
            :class:`~biaslens.bias.AnalysisUnavailable`: when the service
                cannot be reached or returns an error.
        """
        return await _analyze(document, source, url=url, client=self._client)

    def analyze_sync(
        self,
        document: str | BeautifulSoup,
        source: str | None = None,
        url: str = "",
    ) -> AnnotatedArticle:
        """Blocking wrapper around :meth:`analyze` for non-async callers."""
        return asyncio.run(self.analyze(document, source, url))
