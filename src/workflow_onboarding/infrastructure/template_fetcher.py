"""Plain HTTP download of the workflow template: implements TemplateSource."""

from __future__ import annotations

import logging

import httpx

from workflow_onboarding.domain.exceptions import TemplateFetchError

logger = logging.getLogger(__name__)


class HttpTemplateFetcher:
    """Concrete ``TemplateSource`` doing an unauthenticated GET."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def fetch(self, url: str) -> bytes:
        """Return the raw body served at *url*."""
        try:
            resp = await self._client.get(
                url,
                headers={"User-Agent": "workflow-onboarding/1.0"},
                follow_redirects=True,
            )
        except httpx.HTTPError as exc:
            raise TemplateFetchError(f"Network error fetching {url}: {exc}") from exc

        if resp.status_code != 200:
            raise TemplateFetchError(f"Template URL returned HTTP {resp.status_code}: {url}")

        logger.debug("Fetched %d bytes of template from %s", len(resp.content), url)
        return resp.content
