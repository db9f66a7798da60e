from __future__ import annotations

import pytest

from tests._fixtures.fake_host import FakeRepositoryHost, FakeTemplateSource
from workflow_onboarding.domain.value_objects import AuditConfig
from workflow_onboarding.services.branch_manager import BranchManager
from workflow_onboarding.services.onboarding_classifier import OnboardingClassifier
from workflow_onboarding.services.remediation import RemediationWorkflow
from workflow_onboarding.services.tree_scanner import TreeScanner


@pytest.fixture
def config() -> AuditConfig:
    return AuditConfig(
        organization="acme",
        workflow_file_name="polaris.yml",
        tracked_branches=("main", "master", "dev"),
        template_url="https://example.test/polaris.yml",
    )


@pytest.fixture
def host() -> FakeRepositoryHost:
    return FakeRepositoryHost()


@pytest.fixture
def templates() -> FakeTemplateSource:
    return FakeTemplateSource()


@pytest.fixture
def remediation(
    host: FakeRepositoryHost, templates: FakeTemplateSource, config: AuditConfig
) -> RemediationWorkflow:
    return RemediationWorkflow(host, BranchManager(host), templates, config)


@pytest.fixture
def make_classifier(host: FakeRepositoryHost, templates: FakeTemplateSource):
    """Build a classifier over the fake host for a given config."""

    def _make(config: AuditConfig) -> OnboardingClassifier:
        remediation = RemediationWorkflow(host, BranchManager(host), templates, config)
        return OnboardingClassifier(host, TreeScanner(host, config), remediation, config)

    return _make
