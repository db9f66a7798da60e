"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from workflow_onboarding.infrastructure.config import DEFAULT_TEMPLATE_URL, Settings

_ENV_VARS = (
    "GITHUB_TOKEN",
    "ORGANIZATION",
    "WORKFLOW_FILE_NAME",
    "TRACKED_BRANCHES",
    "OUTPUT_PATH",
    "CREATE_PULL_REQUESTS",
    "MAX_CONCURRENCY",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults() -> None:
    settings = Settings()

    assert settings.organization == "sig-se-demo"
    assert settings.workflow_file_name == "polaris.yml"
    assert settings.tracked_branches == ["main", "master", "dev"]
    assert settings.output_path == Path("./onboarding_metrics.csv")
    assert settings.template_url == DEFAULT_TEMPLATE_URL
    assert settings.create_pull_requests is False
    assert settings.github_token is None


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_secret")
    monkeypatch.setenv("ORGANIZATION", "acme")
    monkeypatch.setenv("TRACKED_BRANCHES", '["trunk", "release"]')
    monkeypatch.setenv("CREATE_PULL_REQUESTS", "true")
    monkeypatch.setenv("MAX_CONCURRENCY", "4")

    settings = Settings()

    assert settings.github_token is not None
    assert settings.github_token.get_secret_value() == "ghp_secret"
    assert "ghp_secret" not in repr(settings)
    config = settings.to_audit_config()
    assert config.organization == "acme"
    assert config.tracked_branches == ("trunk", "release")
    assert config.create_pull_requests is True
    assert config.max_concurrency == 4


def test_env_file_is_read(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("ORGANIZATION=from-dotenv\n", encoding="utf-8")

    assert Settings().organization == "from-dotenv"
