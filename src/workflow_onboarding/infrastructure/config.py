"""Application configuration: loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from workflow_onboarding.domain.value_objects import AuditConfig

DEFAULT_TEMPLATE_URL = (
    "https://raw.githubusercontent.com/sig-se-demo/webgoat-demo/main/"
    ".github/workflows/polaris.yml"
)


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    github_token: SecretStr | None = None
    github_api_url: str = "https://api.github.com"
    organization: str = "sig-se-demo"
    workflow_file_name: str = "polaris.yml"
    search_root: str = ".github"
    workflow_directory: str = ".github/workflows"
    tracked_branches: list[str] = ["main", "master", "dev"]
    template_url: str = DEFAULT_TEMPLATE_URL
    output_path: Path = Path("./onboarding_metrics.csv")
    create_pull_requests: bool = False
    max_concurrency: int = 1
    page_size: int = 100
    request_timeout: float = 30.0
    log_level: str = "INFO"

    def to_audit_config(self) -> AuditConfig:
        """Freeze the audit-relevant fields into the domain value object."""
        return AuditConfig(
            organization=self.organization,
            workflow_file_name=self.workflow_file_name,
            tracked_branches=tuple(self.tracked_branches),
            template_url=self.template_url,
            search_root=self.search_root,
            workflow_directory=self.workflow_directory,
            create_pull_requests=self.create_pull_requests,
            max_concurrency=self.max_concurrency,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
