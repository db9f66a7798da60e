"""GitHub REST API adapter: implements the RepositoryHost port."""

from __future__ import annotations

import base64
import logging
from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import httpx

from workflow_onboarding.domain.entities import (
    EntryType,
    FileContent,
    PullRequest,
    Repository,
    TreeEntry,
)
from workflow_onboarding.domain.exceptions import (
    BranchAlreadyExistsError,
    GitHubApiError,
    GitHubAuthenticationError,
    GitHubRateLimitError,
    RepositoryAccessDeniedError,
)

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_ENTRY_TYPES = {entry_type.value: entry_type for entry_type in EntryType}


class GitHubRestAdapter:
    """Concrete RepositoryHost backed by the GitHub v3 REST API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        *,
        api_url: str = _GITHUB_API,
        page_size: int = 100,
    ) -> None:
        self._client = client
        self._api_url = api_url.rstrip("/")
        self._page_size = page_size
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "workflow-onboarding/1.0",
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    # ── Repositories ────────────────────────────────────────────────────

    async def list_org_repositories(self, org: str) -> list[Repository]:
        """GET /orgs/{org}/repos page by page until an empty page → [Repository]."""
        repositories: list[Repository] = []
        page = 1
        while True:
            resp = await self._request(
                "GET",
                f"/orgs/{quote(org)}/repos",
                params={"type": "all", "per_page": str(self._page_size), "page": str(page)},
            )
            data = resp.json()
            if not data:
                break
            repositories.extend(
                Repository(owner=item["owner"]["login"], name=item["name"])
                for item in data
            )
            page += 1
        logger.debug("Listed %d repositories of %s in %d pages", len(repositories), org, page - 1)
        return repositories

    # ── Contents ────────────────────────────────────────────────────────

    async def get_tree_entries(
        self, repository: Repository, path: str, ref: str
    ) -> list[TreeEntry] | None:
        """GET /repos/{owner}/{repo}/contents/{path}?ref= → [TreeEntry] | None."""
        resp = await self._request(
            "GET",
            self._contents_endpoint(repository, path),
            params={"ref": ref},
            allow_missing=True,
        )
        if resp is None:
            return None

        data = resp.json()
        items = data if isinstance(data, list) else [data]
        entries: list[TreeEntry] = []
        for item in items:
            entry_type = _ENTRY_TYPES.get(item.get("type", ""))
            if entry_type is None:
                logger.debug("Ignoring %s of unknown type %r", item.get("path"), item.get("type"))
                continue
            entries.append(
                TreeEntry(path=item["path"], type=entry_type, name=item["name"])
            )
        return entries

    async def get_file_content(
        self, repository: Repository, path: str, ref: str
    ) -> FileContent | None:
        """GET /repos/{owner}/{repo}/contents/{path}?ref= → FileContent | None."""
        resp = await self._request(
            "GET",
            self._contents_endpoint(repository, path),
            params={"ref": ref},
            allow_missing=True,
        )
        if resp is None:
            return None

        data = resp.json()
        if not isinstance(data, dict) or data.get("type") != "file":
            raise GitHubApiError(f"{path} in {repository.full_name}@{ref} is not a file")
        return FileContent(
            content=base64.b64decode(data.get("content") or ""),
            sha=data["sha"],
        )

    async def create_or_update_file(
        self,
        repository: Repository,
        path: str,
        branch: str,
        content: bytes,
        message: str,
        sha: str | None = None,
    ) -> None:
        """PUT /repos/{owner}/{repo}/contents/{path} with base64 content."""
        payload: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": branch,
        }
        if sha is not None:
            payload["sha"] = sha
        await self._request("PUT", self._contents_endpoint(repository, path), json=payload)

    # ── Refs ────────────────────────────────────────────────────────────

    async def get_branch_commit(
        self, repository: Repository, branch: str
    ) -> str | None:
        """GET /repos/{owner}/{repo}/git/ref/heads/{branch} → sha | None."""
        resp = await self._request(
            "GET",
            f"{self._repo_endpoint(repository)}/git/ref/heads/{quote(branch)}",
            allow_missing=True,
        )
        if resp is None:
            return None
        return resp.json()["object"]["sha"]

    async def create_branch_ref(
        self, repository: Repository, branch: str, sha: str
    ) -> None:
        """POST /repos/{owner}/{repo}/git/refs."""
        try:
            await self._request(
                "POST",
                f"{self._repo_endpoint(repository)}/git/refs",
                json={"ref": f"refs/heads/{branch}", "sha": sha},
            )
        except GitHubApiError as exc:
            if exc.status_code == 422 and "already exists" in str(exc).lower():
                raise BranchAlreadyExistsError(
                    f"Branch {branch} already exists in {repository.full_name}",
                    status_code=422,
                ) from exc
            raise

    # ── Pull requests ───────────────────────────────────────────────────

    async def list_open_pull_requests(
        self, repository: Repository, head: str, base: str
    ) -> list[PullRequest]:
        """GET /repos/{owner}/{repo}/pulls?head={owner}:{head}&base={base}&state=open."""
        resp = await self._request(
            "GET",
            f"{self._repo_endpoint(repository)}/pulls",
            params={
                "head": f"{repository.owner}:{head}",
                "base": base,
                "state": "open",
                "per_page": str(self._page_size),
            },
        )
        return [_to_pull_request(item) for item in resp.json()]

    async def create_pull_request(
        self,
        repository: Repository,
        head: str,
        base: str,
        title: str,
        body: str,
    ) -> PullRequest:
        """POST /repos/{owner}/{repo}/pulls → PullRequest."""
        resp = await self._request(
            "POST",
            f"{self._repo_endpoint(repository)}/pulls",
            json={"title": title, "head": head, "base": base, "body": body},
        )
        return _to_pull_request(resp.json())

    # ── HTTP plumbing ───────────────────────────────────────────────────

    @staticmethod
    def _repo_endpoint(repository: Repository) -> str:
        return f"/repos/{quote(repository.owner)}/{quote(repository.name)}"

    def _contents_endpoint(self, repository: Repository, path: str) -> str:
        return f"{self._repo_endpoint(repository)}/contents/{quote(path.strip('/'))}"

    async def _request(
        self,
        method: str,
        endpoint: str,
        *,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
        allow_missing: bool = False,
    ) -> httpx.Response | None:
        """Perform a GitHub API request with error translation.

        A 404 becomes ``None`` when *allow_missing* is set; every other
        non-2xx status raises a :class:`GitHubApiError` subclass.
        """
        url = f"{self._api_url}{endpoint}"
        logger.debug("%s %s %s", method, url, params or "")
        try:
            resp = await self._client.request(
                method, url, headers=self._api_headers, params=params, json=json
            )
        except httpx.HTTPError as exc:
            raise GitHubApiError(f"Network error on {method} {url}: {exc}") from exc

        if resp.is_success:
            return resp

        if resp.status_code == 404 and allow_missing:
            return None

        raise _translate_error(method, url, resp)


def _to_pull_request(item: dict[str, Any]) -> PullRequest:
    return PullRequest(
        number=item["number"],
        head=item["head"]["ref"],
        base=item["base"]["ref"],
        url=item.get("html_url", ""),
    )


def _error_detail(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(data, dict):
        return str(data.get("message", ""))
    return ""


def _translate_error(method: str, url: str, resp: httpx.Response) -> GitHubApiError:
    status = resp.status_code
    detail = _error_detail(resp)

    if status == 401:
        return GitHubAuthenticationError(
            "GitHub rejected the token. Set a valid GITHUB_TOKEN environment variable.",
            status_code=status,
        )

    if status == 403:
        remaining = resp.headers.get("x-ratelimit-remaining", "")
        if remaining == "0":
            reset_raw = resp.headers.get("x-ratelimit-reset", "")
            try:
                reset_str = datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
                    "%Y-%m-%d %H:%M:%S UTC"
                )
            except (ValueError, OSError):
                reset_str = reset_raw or "unknown"
            return GitHubRateLimitError(
                f"GitHub API rate limit exceeded. Resets at {reset_str}.",
                status_code=status,
            )
        return RepositoryAccessDeniedError(
            f"Access denied for {method} {url}: {detail}", status_code=status
        )

    if status == 429:
        return GitHubRateLimitError(
            "GitHub API rate limit exceeded (HTTP 429).", status_code=status
        )

    return GitHubApiError(
        f"GitHub API returned HTTP {status} for {method} {url}: {detail}",
        status_code=status,
    )
