"""Port: workflow template source."""

from __future__ import annotations

from typing import Protocol


class TemplateSource(Protocol):
    """Abstract contract for downloading the canonical workflow file."""

    async def fetch(self, url: str) -> bytes:
        """Return the raw bytes served at *url*."""
        ...
