"""Port: repository host, defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol, Sequence

from workflow_onboarding.domain.entities import (
    FileContent,
    PullRequest,
    Repository,
    TreeEntry,
)


class RepositoryHost(Protocol):
    """Abstract contract for the remote repository-hosting API.

    Absent branches, directories and files are reported as ``None``; any
    other failure is raised.
    """

    async def list_org_repositories(self, org: str) -> list[Repository]:
        """Return every repository of *org*, following page-number pagination."""
        ...

    async def get_tree_entries(
        self, repository: Repository, path: str, ref: str
    ) -> list[TreeEntry] | None:
        """Return the entries of one directory level, or ``None`` if absent."""
        ...

    async def get_branch_commit(
        self, repository: Repository, branch: str
    ) -> str | None:
        """Return the commit SHA at the tip of *branch*, or ``None``."""
        ...

    async def create_branch_ref(
        self, repository: Repository, branch: str, sha: str
    ) -> None:
        """Create ``refs/heads/<branch>`` at *sha*; raise if it already exists."""
        ...

    async def get_file_content(
        self, repository: Repository, path: str, ref: str
    ) -> FileContent | None:
        """Return the file at *path* on *ref*, or ``None`` if absent."""
        ...

    async def create_or_update_file(
        self,
        repository: Repository,
        path: str,
        branch: str,
        content: bytes,
        message: str,
        sha: str | None = None,
    ) -> None:
        """Commit *content* to *path*; *sha* is required when the file exists."""
        ...

    async def list_open_pull_requests(
        self, repository: Repository, head: str, base: str
    ) -> Sequence[PullRequest]:
        """Return open pull requests from *head* into *base*."""
        ...

    async def create_pull_request(
        self,
        repository: Repository,
        head: str,
        base: str,
        title: str,
        body: str,
    ) -> PullRequest:
        """Open a pull request and return it."""
        ...
