"""Command-line entry point for the onboarding audit."""

from __future__ import annotations

import argparse
import asyncio
import logging
import time
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from workflow_onboarding.domain.entities import AuditResult, FleetMetrics
from workflow_onboarding.domain.exceptions import OnboardingError
from workflow_onboarding.infrastructure.config import Settings, get_settings
from workflow_onboarding.interface.dependencies import audit_session, build_report_writer
from workflow_onboarding.interface.error_handlers import exit_code_for

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workflow-onboarding",
        description=(
            "Audit an organization's repositories for a CI workflow file on the "
            "tracked branches and optionally open pull requests that add it."
        ),
    )
    parser.add_argument("--org", dest="organization", help="GitHub organization to audit.")
    parser.add_argument(
        "--file-name",
        dest="workflow_file_name",
        help="Workflow file name to look for (exact match).",
    )
    parser.add_argument(
        "--branch",
        dest="tracked_branches",
        action="append",
        help="Tracked branch; repeat to track several (order is kept).",
    )
    parser.add_argument(
        "--output", dest="output_path", type=Path, help="CSV report location."
    )
    parser.add_argument(
        "--create-prs",
        dest="create_pull_requests",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Open pull requests adding the workflow file where it is missing.",
    )
    parser.add_argument(
        "--concurrency",
        dest="max_concurrency",
        type=int,
        help="Number of repositories processed at the same time.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Increase log verbosity for troubleshooting.",
    )
    return parser


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    fields = (
        "organization",
        "workflow_file_name",
        "tracked_branches",
        "output_path",
        "create_pull_requests",
        "max_concurrency",
    )
    return {name: getattr(args, name) for name in fields if getattr(args, name) is not None}


def load_settings(overrides: dict[str, Any]) -> Settings:
    """Environment settings with *overrides* applied and validated."""
    return Settings.model_validate({**get_settings().model_dump(), **overrides})


def render_summary(metrics: FleetMetrics) -> str:
    """Human-readable summary of a run."""
    return "\n".join(
        [
            "Onboarding Metrics:",
            f"Total Repositories: {metrics.total}",
            f"Onboarded Repositories: {metrics.fully_onboarded}",
            f"Partially Onboarded Repositories: {metrics.partially_onboarded}",
            f"Not Onboarded Repositories: {metrics.not_onboarded}",
            f"Pull Requests Submitted: {metrics.pull_requests_submitted}",
            f"Skipped Repositories: {metrics.skipped}",
        ]
    )


async def run_audit(settings: Settings) -> AuditResult:
    """Audit the organization, print the summary and write the report."""
    config = settings.to_audit_config()
    async with audit_session(settings, config) as classifier:
        result = await classifier.execute()

    print(render_summary(result.metrics))
    build_report_writer(settings).write(result.records)
    return result


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint; returns the process exit status."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_settings(_overrides(args))
    except ValidationError as exc:
        parser.exit(2, f"Invalid configuration: {exc}\n")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )

    started = time.perf_counter()
    try:
        asyncio.run(run_audit(settings))
    except OnboardingError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return exit_code_for(exc)

    print(f"Execution Time: {time.perf_counter() - started:.2f}s")
    return 0
