"""Domain entities: pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EntryType(str, Enum):
    """Kind of node returned by a directory listing."""

    FILE = "file"
    DIR = "dir"
    SYMLINK = "symlink"
    SUBMODULE = "submodule"


class OnboardingStatus(str, Enum):
    """Repository-level classification across the tracked branches."""

    FULLY_ONBOARDED = "fully_onboarded"
    PARTIALLY_ONBOARDED = "partially_onboarded"
    NOT_ONBOARDED = "not_onboarded"


@dataclass(frozen=True, slots=True)
class Repository:
    """A repository owned by the audited organization."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True, slots=True)
class TreeEntry:
    """A single entry of one directory level at a given ref."""

    path: str
    type: EntryType
    name: str


@dataclass(frozen=True, slots=True)
class FileContent:
    """Decoded file content plus the blob SHA needed to update it."""

    content: bytes
    sha: str


@dataclass(frozen=True, slots=True)
class PullRequest:
    """Minimal view of a pull request."""

    number: int
    head: str
    base: str
    url: str = ""


@dataclass(frozen=True, slots=True)
class OnboardingRecord:
    """Outcome of auditing one repository."""

    repository: Repository
    onboarded_branches: tuple[str, ...]
    not_onboarded_branches: tuple[str, ...]
    pull_requests_created: int = 0

    @property
    def name(self) -> str:
        return self.repository.name

    @property
    def onboarded(self) -> bool:
        return bool(self.onboarded_branches) and not self.not_onboarded_branches

    @property
    def partially_onboarded(self) -> bool:
        return bool(self.onboarded_branches) and bool(self.not_onboarded_branches)

    @property
    def pr_submitted(self) -> bool:
        return self.pull_requests_created > 0

    @property
    def skipped(self) -> bool:
        """No tracked branch carries the file and no remediation was opened."""
        return not self.onboarded_branches and not self.pr_submitted

    @property
    def status(self) -> OnboardingStatus:
        if self.onboarded:
            return OnboardingStatus.FULLY_ONBOARDED
        if self.partially_onboarded:
            return OnboardingStatus.PARTIALLY_ONBOARDED
        return OnboardingStatus.NOT_ONBOARDED


@dataclass(slots=True)
class FleetMetrics:
    """Counters accumulated across every repository of a run."""

    total: int = 0
    fully_onboarded: int = 0
    partially_onboarded: int = 0
    pull_requests_submitted: int = 0
    skipped: int = 0

    @property
    def not_onboarded(self) -> int:
        return self.total - self.fully_onboarded - self.partially_onboarded

    def record(self, record: OnboardingRecord) -> None:
        """Fold one finished repository into the counters."""
        self.total += 1
        status = record.status
        if status is OnboardingStatus.FULLY_ONBOARDED:
            self.fully_onboarded += 1
        elif status is OnboardingStatus.PARTIALLY_ONBOARDED:
            self.partially_onboarded += 1
        self.pull_requests_submitted += record.pull_requests_created
        if record.skipped:
            self.skipped += 1


@dataclass(frozen=True, slots=True)
class AuditResult:
    """Everything a run produces: per-repository records in listing order."""

    records: tuple[OnboardingRecord, ...]
    metrics: FleetMetrics
