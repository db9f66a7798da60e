"""Value objects: self-validating domain primitives."""

from __future__ import annotations

from dataclasses import dataclass

from workflow_onboarding.domain.exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class AuditConfig:
    """Immutable run configuration shared by every service.

    Built once at start-up (see ``Settings.to_audit_config``) and passed into
    each component.  The branch order is the order branches are scanned and
    listed in the report.
    """

    organization: str
    workflow_file_name: str
    tracked_branches: tuple[str, ...]
    template_url: str
    search_root: str = ".github"
    workflow_directory: str = ".github/workflows"
    create_pull_requests: bool = False
    max_concurrency: int = 1

    def __post_init__(self) -> None:
        if not self.organization.strip():
            raise ConfigurationError("Organization name must not be empty.")
        if not self.workflow_file_name.strip() or "/" in self.workflow_file_name:
            raise ConfigurationError(
                f"Invalid workflow file name: '{self.workflow_file_name}'."
            )
        if not self.tracked_branches:
            raise ConfigurationError("At least one tracked branch is required.")
        if len(set(self.tracked_branches)) != len(self.tracked_branches):
            raise ConfigurationError(
                f"Tracked branches contain duplicates: {list(self.tracked_branches)}"
            )
        if any(not branch.strip() for branch in self.tracked_branches):
            raise ConfigurationError("Tracked branch names must not be empty.")
        if self.max_concurrency < 1:
            raise ConfigurationError("max_concurrency must be at least 1.")

    @property
    def target_path(self) -> str:
        """Repository path the remediation writes the workflow file to."""
        return f"{self.workflow_directory.strip('/')}/{self.workflow_file_name}"

    def remediation_branch(self, branch: str) -> str:
        return f"add-{self.workflow_file_name}-{branch}"

    @property
    def commit_message(self) -> str:
        return f"Add {self.workflow_file_name} workflow file"

    @property
    def pull_request_title(self) -> str:
        return f"Add {self.workflow_file_name} workflow file"

    def pull_request_body(self, branch: str) -> str:
        return (
            f"This PR adds the {self.workflow_file_name} workflow file "
            f"to the {branch} branch."
        )
