"""CSV report writer: implements the ReportWriter port."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Sequence

from workflow_onboarding.domain.entities import OnboardingRecord
from workflow_onboarding.domain.exceptions import ReportWriteError

logger = logging.getLogger(__name__)

HEADER = (
    "Repository",
    "Onboarded",
    "Partially Onboarded",
    "Onboarded Branches",
    "Not Onboarded Branches",
    "PR Submitted",
)


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def to_row(record: OnboardingRecord) -> tuple[str, ...]:
    """Render one record as a report row."""
    return (
        record.name,
        _yes_no(record.onboarded),
        _yes_no(record.partially_onboarded),
        ", ".join(record.onboarded_branches),
        ", ".join(record.not_onboarded_branches),
        _yes_no(record.pr_submitted),
    )


class CsvReportWriter:
    """Writes one row per repository to a fixed path, replacing it each run."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def write(self, records: Sequence[OnboardingRecord]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", newline="", encoding="utf-8") as fh:
                writer = csv.writer(fh)
                writer.writerow(HEADER)
                writer.writerows(to_row(record) for record in records)
        except OSError as exc:
            raise ReportWriteError(f"Could not write report to {self._path}: {exc}") from exc
        logger.info("Metrics saved to %s", self._path)
