"""Domain exception hierarchy.

"Not found" is never an exception here: ports return ``None`` for absent
branches, directories and files.  Everything below is a genuine failure.
The remediation workflow is the only place these are absorbed; anywhere
else they terminate the run.
"""

from __future__ import annotations


class OnboardingError(Exception):
    """Base exception for the entire application."""


# ── Configuration ───────────────────────────────────────────────────────────


class ConfigurationError(OnboardingError):
    """The run configuration is invalid."""


# ── GitHub API errors ───────────────────────────────────────────────────────


class GitHubApiError(OnboardingError):
    """The GitHub API returned an unexpected status or was unreachable."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GitHubAuthenticationError(GitHubApiError):
    """The token was rejected (401)."""


class RepositoryAccessDeniedError(GitHubApiError):
    """Access to the resource was denied (403 without rate-limit exhaustion)."""


class GitHubRateLimitError(GitHubApiError):
    """GitHub API rate limit exceeded (429 / 403 with rate-limit header)."""


class BranchAlreadyExistsError(GitHubApiError):
    """A ref with the requested name already exists (422 on ref creation)."""


# ── Remediation ─────────────────────────────────────────────────────────────


class BaseBranchMissingError(OnboardingError):
    """The branch a remediation branch should start from does not exist."""

    def __init__(self, repository: str, branch: str) -> None:
        super().__init__(
            f"Base branch {branch} does not exist in repository {repository}"
        )
        self.repository = repository
        self.branch = branch


class TemplateFetchError(OnboardingError):
    """The workflow template could not be downloaded."""


# ── Output ──────────────────────────────────────────────────────────────────


class ReportWriteError(OnboardingError):
    """The report file could not be written."""
