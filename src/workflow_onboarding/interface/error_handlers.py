"""Translate domain errors into process exit codes.

Each domain exception maps to a specific exit status; anything not listed
falls back to 1.
"""

from __future__ import annotations

from workflow_onboarding.domain.exceptions import (
    ConfigurationError,
    GitHubAuthenticationError,
    GitHubRateLimitError,
    OnboardingError,
    RepositoryAccessDeniedError,
)

EXIT_FAILURE = 1

_EXCEPTION_EXIT_CODES: list[tuple[type[OnboardingError], int]] = [
    (ConfigurationError, 2),
    (GitHubAuthenticationError, 3),
    (RepositoryAccessDeniedError, 3),
    (GitHubRateLimitError, 4),
]


def exit_code_for(exc: OnboardingError) -> int:
    """Return the exit status for *exc* (first matching entry wins)."""
    for exc_type, code in _EXCEPTION_EXIT_CODES:
        if isinstance(exc, exc_type):
            return code
    return EXIT_FAILURE
