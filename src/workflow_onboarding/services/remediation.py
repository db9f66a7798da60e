"""Remediation workflow: branch, commit and pull request for a missing file.

Every step checks the remote state before acting, so running the workflow
again for the same repository and branch never produces a second branch or
a second open pull request.  This class is the only recovery boundary of
the application: any failure inside :meth:`RemediationWorkflow.remediate`
is logged and turned into ``False``.
"""

from __future__ import annotations

import logging

from workflow_onboarding.domain.entities import Repository
from workflow_onboarding.domain.exceptions import BaseBranchMissingError
from workflow_onboarding.domain.ports.repository_host import RepositoryHost
from workflow_onboarding.domain.ports.template_source import TemplateSource
from workflow_onboarding.domain.value_objects import AuditConfig
from workflow_onboarding.services.branch_manager import BranchManager

logger = logging.getLogger(__name__)


class RemediationWorkflow:
    """Opens a pull request that adds the workflow file to one branch.

    Parameters
    ----------
    host:
        Adapter for the repository-hosting API.
    branches:
        Branch manager used to look up and create the remediation branch.
    templates:
        Source of the canonical workflow file.
    config:
        Run configuration (file name, target path, template URL).
    """

    def __init__(
        self,
        host: RepositoryHost,
        branches: BranchManager,
        templates: TemplateSource,
        config: AuditConfig,
    ) -> None:
        self._host = host
        self._branches = branches
        self._templates = templates
        self._config = config

    async def remediate(self, repository: Repository, branch: str) -> bool:
        """Return True iff a new pull request was opened by this call."""
        try:
            return await self._remediate(repository, branch)
        except BaseBranchMissingError as exc:
            logger.error("%s", exc)
            return False
        except Exception:
            logger.exception(
                "Failed to create pull request for %s on branch %s",
                repository.full_name,
                branch,
            )
            return False

    async def _remediate(self, repository: Repository, branch: str) -> bool:
        config = self._config
        head = config.remediation_branch(branch)

        # 1. Remediation branch
        if await self._branches.get_ref(repository, head) is None:
            await self._branches.create_branch(repository, branch, head)
        else:
            logger.info("Branch %s already exists in repository %s", head, repository.name)

        # 2. Template
        content = await self._templates.fetch(config.template_url)

        # 3. Commit, as an update when the file is already on the branch
        existing = await self._host.get_file_content(repository, config.target_path, head)
        if existing is not None and existing.content == content:
            logger.info(
                "%s on %s in %s already matches the template",
                config.target_path,
                head,
                repository.name,
            )
        else:
            await self._host.create_or_update_file(
                repository,
                config.target_path,
                head,
                content,
                config.commit_message,
                sha=existing.sha if existing is not None else None,
            )
            logger.info(
                "%s %s on %s in %s",
                "Updated" if existing is not None else "Committed",
                config.target_path,
                head,
                repository.name,
            )

        # 4. Pull request
        open_prs = await self._host.list_open_pull_requests(repository, head, branch)
        if open_prs:
            logger.info(
                "A pull request already exists for %s:%s to %s in repository %s",
                repository.owner,
                head,
                branch,
                repository.name,
            )
            return False

        pr = await self._host.create_pull_request(
            repository,
            head,
            branch,
            config.pull_request_title,
            config.pull_request_body(branch),
        )
        logger.info(
            "Created pull request #%d to add workflow file to %s on branch %s",
            pr.number,
            repository.name,
            branch,
        )
        return True
