"""Dependency wiring: builds the use case from settings and a shared client."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx

from workflow_onboarding.domain.ports.report_writer import ReportWriter
from workflow_onboarding.domain.value_objects import AuditConfig
from workflow_onboarding.infrastructure.config import Settings
from workflow_onboarding.infrastructure.csv_report_writer import CsvReportWriter
from workflow_onboarding.infrastructure.github_rest_adapter import GitHubRestAdapter
from workflow_onboarding.infrastructure.template_fetcher import HttpTemplateFetcher
from workflow_onboarding.services.branch_manager import BranchManager
from workflow_onboarding.services.onboarding_classifier import OnboardingClassifier
from workflow_onboarding.services.remediation import RemediationWorkflow
from workflow_onboarding.services.tree_scanner import TreeScanner


def build_classifier(
    settings: Settings, config: AuditConfig, client: httpx.AsyncClient
) -> OnboardingClassifier:
    """Wire the concrete adapters into the classifier."""
    token = settings.github_token.get_secret_value() if settings.github_token else None
    host = GitHubRestAdapter(
        client=client,
        token=token,
        api_url=settings.github_api_url,
        page_size=settings.page_size,
    )
    remediation = RemediationWorkflow(
        host=host,
        branches=BranchManager(host),
        templates=HttpTemplateFetcher(client),
        config=config,
    )
    return OnboardingClassifier(
        host=host,
        scanner=TreeScanner(host, config),
        remediation=remediation,
        config=config,
    )


@asynccontextmanager
async def audit_session(
    settings: Settings, config: AuditConfig
) -> AsyncIterator[OnboardingClassifier]:
    """Yield a wired classifier; the HTTP client is closed on exit."""
    async with httpx.AsyncClient(timeout=httpx.Timeout(settings.request_timeout)) as client:
        yield build_classifier(settings, config, client)


def build_report_writer(settings: Settings) -> ReportWriter:
    return CsvReportWriter(settings.output_path)
