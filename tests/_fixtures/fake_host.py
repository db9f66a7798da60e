"""In-memory stand-ins for the repository host and template source."""

from __future__ import annotations

import hashlib
from collections import Counter
from dataclasses import dataclass, field

from workflow_onboarding.domain.entities import (
    EntryType,
    FileContent,
    PullRequest,
    Repository,
    TreeEntry,
)
from workflow_onboarding.domain.exceptions import BranchAlreadyExistsError, GitHubApiError


def blob_sha(content: bytes) -> str:
    return hashlib.sha1(content).hexdigest()


@dataclass
class FakeRepositoryHost:
    """Models branches as ``{path: bytes}`` snapshots, one per branch."""

    repositories: list[Repository] = field(default_factory=list)
    branches: dict[tuple[str, str], dict[str, bytes]] = field(default_factory=dict)
    pull_requests: list[tuple[str, PullRequest]] = field(default_factory=list)
    calls: Counter = field(default_factory=Counter)
    listed_paths: list[tuple[str, str, str]] = field(default_factory=list)
    file_writes: list[tuple[str, str, str, str | None]] = field(default_factory=list)
    failing: dict[str, Exception] = field(default_factory=dict)

    # ── Test setup helpers ──────────────────────────────────────────────

    def add_repository(
        self, name: str, branches: dict[str, list[str]], owner: str = "acme"
    ) -> Repository:
        repository = Repository(owner=owner, name=name)
        self.repositories.append(repository)
        for branch, paths in branches.items():
            self.branches[(repository.full_name, branch)] = {
                path: b"content" for path in paths
            }
        return repository

    def files(self, repository: Repository, branch: str) -> dict[str, bytes]:
        return self.branches[(repository.full_name, branch)]

    def open_pull_requests(self, repository: Repository) -> list[PullRequest]:
        return [pr for name, pr in self.pull_requests if name == repository.full_name]

    def _check(self, operation: str) -> None:
        self.calls[operation] += 1
        if operation in self.failing:
            raise self.failing[operation]

    # ── RepositoryHost ──────────────────────────────────────────────────

    async def list_org_repositories(self, org: str) -> list[Repository]:
        self._check("list_org_repositories")
        return list(self.repositories)

    async def get_tree_entries(
        self, repository: Repository, path: str, ref: str
    ) -> list[TreeEntry] | None:
        self._check("get_tree_entries")
        self.listed_paths.append((repository.name, ref, path))
        files = self.branches.get((repository.full_name, ref))
        if files is None:
            return None

        prefix = path.strip("/") + "/"
        children: dict[str, EntryType] = {}
        for file_path in files:
            if not file_path.startswith(prefix):
                continue
            head, sep, _ = file_path[len(prefix):].partition("/")
            children.setdefault(head, EntryType.DIR if sep else EntryType.FILE)
        if not children:
            return None
        return [
            TreeEntry(path=prefix + name, type=entry_type, name=name)
            for name, entry_type in children.items()
        ]

    async def get_branch_commit(self, repository: Repository, branch: str) -> str | None:
        self._check("get_branch_commit")
        if (repository.full_name, branch) not in self.branches:
            return None
        return f"sha-{branch}"

    async def create_branch_ref(self, repository: Repository, branch: str, sha: str) -> None:
        self._check("create_branch_ref")
        key = (repository.full_name, branch)
        if key in self.branches:
            raise BranchAlreadyExistsError(f"Branch {branch} already exists", status_code=422)
        base = sha.removeprefix("sha-")
        self.branches[key] = dict(self.branches[(repository.full_name, base)])

    async def get_file_content(
        self, repository: Repository, path: str, ref: str
    ) -> FileContent | None:
        self._check("get_file_content")
        content = self.branches.get((repository.full_name, ref), {}).get(path)
        if content is None:
            return None
        return FileContent(content=content, sha=blob_sha(content))

    async def create_or_update_file(
        self,
        repository: Repository,
        path: str,
        branch: str,
        content: bytes,
        message: str,
        sha: str | None = None,
    ) -> None:
        self._check("create_or_update_file")
        files = self.branches[(repository.full_name, branch)]
        existing = files.get(path)
        if existing is not None and sha != blob_sha(existing):
            raise GitHubApiError("sha does not match", status_code=409)
        files[path] = content
        self.file_writes.append((repository.name, branch, path, sha))

    async def list_open_pull_requests(
        self, repository: Repository, head: str, base: str
    ) -> list[PullRequest]:
        self._check("list_open_pull_requests")
        return [
            pr
            for pr in self.open_pull_requests(repository)
            if pr.head == head and pr.base == base
        ]

    async def create_pull_request(
        self, repository: Repository, head: str, base: str, title: str, body: str
    ) -> PullRequest:
        self._check("create_pull_request")
        pr = PullRequest(number=len(self.pull_requests) + 1, head=head, base=base)
        self.pull_requests.append((repository.full_name, pr))
        return pr


@dataclass
class FakeTemplateSource:
    content: bytes = b"name: polaris\n"
    urls: list[str] = field(default_factory=list)

    async def fetch(self, url: str) -> bytes:
        self.urls.append(url)
        return self.content
