"""Branch lookup and creation on top of the repository host."""

from __future__ import annotations

import logging

from workflow_onboarding.domain.entities import Repository
from workflow_onboarding.domain.exceptions import BaseBranchMissingError
from workflow_onboarding.domain.ports.repository_host import RepositoryHost

logger = logging.getLogger(__name__)


class BranchManager:
    """Reads branch tips and creates branches from them."""

    def __init__(self, host: RepositoryHost) -> None:
        self._host = host

    async def get_ref(self, repository: Repository, branch: str) -> str | None:
        """Return the commit SHA at the tip of *branch*, ``None`` if it does not exist."""
        return await self._host.get_branch_commit(repository, branch)

    async def create_branch(
        self, repository: Repository, base_branch: str, new_branch: str
    ) -> str:
        """Create *new_branch* at the current tip of *base_branch*.

        Raises :class:`BaseBranchMissingError` when the base branch is absent
        and :class:`BranchAlreadyExistsError` when *new_branch* exists.
        Returns the commit SHA the new branch points at.
        """
        sha = await self.get_ref(repository, base_branch)
        if sha is None:
            raise BaseBranchMissingError(repository.name, base_branch)

        await self._host.create_branch_ref(repository, new_branch, sha)
        logger.info(
            "Created branch %s from %s (%s) in %s",
            new_branch,
            base_branch,
            sha[:7],
            repository.full_name,
        )
        return sha
