"""Tests for the template downloader."""

from __future__ import annotations

import httpx
import pytest

from workflow_onboarding.domain.exceptions import TemplateFetchError
from workflow_onboarding.infrastructure.template_fetcher import HttpTemplateFetcher

URL = "https://raw.example.test/acme/templates/main/polaris.yml"


async def test_fetch_returns_raw_bytes() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == URL
        return httpx.Response(200, content=b"name: polaris\n")

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

    assert await HttpTemplateFetcher(client).fetch(URL) == b"name: polaris\n"


async def test_fetch_raises_on_error_status() -> None:
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(404))
    )

    with pytest.raises(TemplateFetchError, match="HTTP 404"):
        await HttpTemplateFetcher(client).fetch(URL)
