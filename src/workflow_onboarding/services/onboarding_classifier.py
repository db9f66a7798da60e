"""Onboarding audit use case: the main orchestration pipeline.

Lists the organization's repositories, scans every tracked branch of each,
optionally remediates the branches that miss the workflow file, and folds
the outcome into fleet metrics.  It depends only on the ports and the other
services; the interface layer injects concrete adapters at runtime.
"""

from __future__ import annotations

import asyncio
import logging

from workflow_onboarding.domain.entities import (
    AuditResult,
    FleetMetrics,
    OnboardingRecord,
    Repository,
)
from workflow_onboarding.domain.ports.repository_host import RepositoryHost
from workflow_onboarding.domain.value_objects import AuditConfig
from workflow_onboarding.services.remediation import RemediationWorkflow
from workflow_onboarding.services.tree_scanner import TreeScanner

logger = logging.getLogger(__name__)


class OnboardingClassifier:
    """Classifies every repository of the organization.

    With ``config.max_concurrency == 1`` repositories are processed strictly
    one after another.  Higher values run whole repositories concurrently;
    branches inside a repository are always handled in tracked order and the
    records keep the listing order.
    """

    def __init__(
        self,
        host: RepositoryHost,
        scanner: TreeScanner,
        remediation: RemediationWorkflow,
        config: AuditConfig,
    ) -> None:
        self._host = host
        self._scanner = scanner
        self._remediation = remediation
        self._config = config

    # ── Public entry point ──────────────────────────────────────────────

    async def execute(self) -> AuditResult:
        """Audit the whole organization and return records plus metrics."""
        config = self._config
        repositories = await self._host.list_org_repositories(config.organization)
        logger.info(
            "Auditing %d repositories of %s for %s on %s",
            len(repositories),
            config.organization,
            config.workflow_file_name,
            ", ".join(config.tracked_branches),
        )

        metrics = FleetMetrics()
        if config.max_concurrency == 1:
            records = []
            for repository in repositories:
                record = await self.classify(repository)
                metrics.record(record)
                records.append(record)
        else:
            sem = asyncio.Semaphore(config.max_concurrency)

            async def _classify_one(repository: Repository) -> OnboardingRecord:
                async with sem:
                    record = await self.classify(repository)
                # single event loop: no await between read and write of the counters
                metrics.record(record)
                return record

            tasks = [asyncio.ensure_future(_classify_one(repo)) for repo in repositories]
            try:
                records = list(await asyncio.gather(*tasks))
            except BaseException:
                # a fatal error ends the run: stop repositories still in flight
                for task in tasks:
                    if not task.done():
                        task.cancel()
                await asyncio.gather(*tasks, return_exceptions=True)
                raise

        return AuditResult(records=tuple(records), metrics=metrics)

    # ── Per repository ──────────────────────────────────────────────────

    async def classify(self, repository: Repository) -> OnboardingRecord:
        """Scan (and optionally remediate) every tracked branch of *repository*."""
        onboarded: list[str] = []
        not_onboarded: list[str] = []
        pull_requests = 0

        for branch in self._config.tracked_branches:
            if await self._scanner.scan(repository, branch):
                logger.info(
                    "%s@%s: %s found",
                    repository.full_name,
                    branch,
                    self._config.workflow_file_name,
                )
                onboarded.append(branch)
                continue

            logger.info(
                "%s@%s: %s missing",
                repository.full_name,
                branch,
                self._config.workflow_file_name,
            )
            not_onboarded.append(branch)
            if self._config.create_pull_requests:
                if await self._remediation.remediate(repository, branch):
                    pull_requests += 1

        record = OnboardingRecord(
            repository=repository,
            onboarded_branches=tuple(onboarded),
            not_onboarded_branches=tuple(not_onboarded),
            pull_requests_created=pull_requests,
        )
        logger.info(
            "%s: %s (onboarded: %s; missing: %s; pull requests: %d)",
            repository.full_name,
            record.status.value,
            ", ".join(onboarded) or "-",
            ", ".join(not_onboarded) or "-",
            pull_requests,
        )
        return record
