"""Port: report writer."""

from __future__ import annotations

from typing import Protocol, Sequence

from workflow_onboarding.domain.entities import OnboardingRecord


class ReportWriter(Protocol):
    """Abstract contract for persisting the per-repository records."""

    def write(self, records: Sequence[OnboardingRecord]) -> None:
        """Serialize *records*, replacing any previous report."""
        ...
