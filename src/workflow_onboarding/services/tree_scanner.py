"""Depth-first search for the workflow file under the search root."""

from __future__ import annotations

from workflow_onboarding.domain.entities import EntryType, Repository
from workflow_onboarding.domain.ports.repository_host import RepositoryHost
from workflow_onboarding.domain.value_objects import AuditConfig


class TreeScanner:
    """Reports whether a branch carries the target file anywhere under the root.

    One directory level is listed per host call and the walk stops at the
    first match, so siblings after the match are never inspected.
    """

    def __init__(self, host: RepositoryHost, config: AuditConfig) -> None:
        self._host = host
        self._root = config.search_root.strip("/")
        self._file_name = config.workflow_file_name

    async def scan(self, repository: Repository, branch: str) -> bool:
        """Return True iff the target file exists under the root on *branch*."""
        return await self._search(repository, branch, self._root)

    async def _search(self, repository: Repository, branch: str, path: str) -> bool:
        entries = await self._host.get_tree_entries(repository, path, branch)
        if entries is None:
            return False

        for entry in entries:
            if entry.type is EntryType.DIR:
                if await self._search(repository, branch, entry.path):
                    return True
            elif entry.type is EntryType.FILE and entry.name == self._file_name:
                return True
        return False
