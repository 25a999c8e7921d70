"""Round-robin triage assignment — command-line entry point.

Usage:
    python -m triage_rotation
    python -m triage_rotation --dry-run      # log picks, change nothing
    python -m triage_rotation --limit 20     # smaller page
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence

from triage_rotation.adapters.linear.linear_adapter import LinearAdapter
from triage_rotation.application.ports.candidate_source import CandidateSourcePort
from triage_rotation.application.ports.directory_port import DirectoryPort
from triage_rotation.application.ports.issue_tracker import IssueTrackerPort
from triage_rotation.application.use_cases.assign_candidates import (
    AssignCandidateUseCase,
    BatchAssignUseCase,
)
from triage_rotation.application.use_cases.resolve_rotation import ResolveRotationUseCase
from triage_rotation.config import Settings, load_settings
from triage_rotation.domain.entities.outcome import BatchReport
from triage_rotation.domain.errors import ConfigurationError, UnknownIdentityError
from triage_rotation.domain.policies.notification import NotificationComposer

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s | %(message)s",
        force=True,
    )
    if not verbose:
        logging.getLogger("httpx").setLevel(logging.WARNING)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Assign unassigned triage issues round-robin across a rotation",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute and log assignments without changing any issue",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of issues to fetch (default: LINEAR_PAGE_SIZE)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(list(argv))


async def run(
    settings: Settings,
    directory: DirectoryPort,
    source: CandidateSourcePort,
    tracker: IssueTrackerPort,
    dry_run: bool = False,
    limit: int | None = None,
) -> BatchReport:
    """Resolve the rotation, then assign one page of candidates.

    Raises:
        UnknownIdentityError: before any mutation if the rotation cannot be resolved.
    """
    rotation = await ResolveRotationUseCase(directory).execute(settings.rotation_contact_keys)

    assign = AssignCandidateUseCase(
        tracker=tracker,
        composer=NotificationComposer(settings.workspace_slug),
        subscribe_assignee=settings.subscribe_assignee,
    )
    batch = BatchAssignUseCase(
        assign_candidate=assign,
        source=source,
        team_id=settings.linear_team_id,
        page_size=limit or settings.page_size,
    )
    return await batch.execute(rotation, dry_run=dry_run)


async def _run_with_linear(settings: Settings, dry_run: bool, limit: int | None) -> BatchReport:
    async with LinearAdapter(
        api_key=settings.linear_api_key,
        api_url=settings.linear_api_url,
        timeout=settings.request_timeout,
    ) as adapter:
        return await run(settings, adapter, adapter, adapter, dry_run=dry_run, limit=limit)


def main(argv: Sequence[str] | None = None) -> int:
    """Exit status: 0 when the batch ran to completion, 1 on a fatal error."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(args.verbose)

    if args.limit is not None and args.limit <= 0:
        logger.error("--limit must be a positive integer")
        return 2

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error("%s", e)
        return 1

    if settings.debug:
        configure_logging(verbose=True)
    if not settings.workspace_slug:
        logger.debug("WORKSPACE_SLUG not set; fallback profile links use a placeholder")

    try:
        asyncio.run(_run_with_linear(settings, args.dry_run, args.limit))
    except UnknownIdentityError as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Closed by user (Ctrl+C)")
        return 130
    except Exception:
        logger.exception("Fatal error during rotation run")
        return 1
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
