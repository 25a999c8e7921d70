"""AssignCandidateUseCase — select, assign, notify and subscribe, one issue at a time."""

from __future__ import annotations

import logging

from triage_rotation.application.ports.candidate_source import CandidateSourcePort
from triage_rotation.application.ports.issue_tracker import IssueTrackerPort
from triage_rotation.domain.entities.actor import Actor
from triage_rotation.domain.entities.candidate import Candidate
from triage_rotation.domain.entities.outcome import AssignmentOutcome, BatchReport
from triage_rotation.domain.entities.rotation import Rotation
from triage_rotation.domain.policies.notification import NotificationComposer
from triage_rotation.domain.policies.round_robin import rotation_index, select
from triage_rotation.domain.value_objects.enums import MessageFormat, OutcomeStatus

logger = logging.getLogger(__name__)


class NotificationFailure(Exception):
    """Every notification strategy was rejected for a candidate."""


class AssignCandidateUseCase:
    """Drives the side effects for a single candidate."""

    def __init__(
        self,
        tracker: IssueTrackerPort,
        composer: NotificationComposer,
        subscribe_assignee: bool = True,
    ):
        self._tracker = tracker
        self._composer = composer
        self._subscribe = subscribe_assignee

    async def execute(
        self, rotation: Rotation, candidate: Candidate, dry_run: bool = False
    ) -> AssignmentOutcome:
        """Process one candidate. Never raises.

        Pipeline:
        1. Round-robin pick keyed on the sequence number
        2. Assign (failure stops here, nothing is posted)
        3. Notify: mention first, Markdown link on rejection
        4. Subscribe the assignee (best effort)
        """
        # Step 1: Round-robin pick
        target = select(rotation, candidate)
        idx = rotation_index(candidate.sequence_number, len(rotation))
        logger.info(
            "- %s%s: assigning to %s (%s) [idx=%d]",
            candidate.display_key,
            f" ({candidate.title})" if candidate.title else "",
            target.display_name, target.id, idx,
        )
        outcome = AssignmentOutcome(
            candidate_id=candidate.id,
            display_key=candidate.display_key,
            selected_actor=target,
            status=OutcomeStatus.ASSIGNED,
        )

        if dry_run:
            outcome.status = OutcomeStatus.PLANNED
            return outcome

        # Step 2: Assign
        try:
            await self._tracker.assign(candidate.id, target.id)
        except Exception as e:
            logger.exception("  Failed to assign %s", candidate.display_key)
            outcome.status = OutcomeStatus.ASSIGN_FAILED
            outcome.error = str(e)
            return outcome
        logger.info("  Assigned %s to %s", candidate.display_key, target.display_name)

        # Step 3: Notify
        try:
            outcome.notification_format = await self._notify(candidate, target)
        except NotificationFailure as e:
            logger.error("  Could not notify %s on %s: %s", target.display_name, candidate.display_key, e)
            outcome.status = OutcomeStatus.NOTIFY_FAILED
            outcome.error = str(e)

        # Step 4: Subscribe
        if self._subscribe:
            try:
                await self._tracker.subscribe(candidate.id, target.id)
                logger.info("  Added %s as follower", target.display_name)
            except Exception as e:
                logger.debug("  Follow not applied for %s: %s", candidate.display_key, e)
                if outcome.status == OutcomeStatus.ASSIGNED:
                    outcome.status = OutcomeStatus.FOLLOW_FAILED
                    outcome.error = str(e)

        return outcome

    async def _notify(self, candidate: Candidate, target: Actor) -> MessageFormat:
        """Post the first notification body the tracker accepts.

        A later strategy is only tried after the previous one errored, so at
        most one comment is created.
        """
        last_error: Exception | None = None
        for message in self._composer.compose(target):
            try:
                await self._tracker.create_comment(candidate.id, message)
            except Exception as e:
                logger.warning("  %s comment failed: %s", message.format.value, e)
                last_error = e
                continue
            logger.info(
                "  Comment posted via %s for %s", message.format.value, target.display_name
            )
            return message.format
        raise NotificationFailure(str(last_error) if last_error else "no notification strategy")


class BatchAssignUseCase:
    """Assign every candidate of one page, sequentially."""

    def __init__(
        self,
        assign_candidate: AssignCandidateUseCase,
        source: CandidateSourcePort,
        team_id: str,
        page_size: int = 100,
    ):
        self._assign = assign_candidate
        self._source = source
        self._team_id = team_id
        self._page_size = page_size

    async def execute(self, rotation: Rotation, dry_run: bool = False) -> BatchReport:
        """Fetch candidates once and process them in source order."""
        candidates = await self._source.list_candidates(self._team_id, self._page_size)
        logger.info(
            "Found %d unassigned triage issue(s) for team %s.", len(candidates), self._team_id
        )

        report = BatchReport()
        if not candidates:
            logger.info("Nothing to do.")
            return report

        for candidate in candidates:
            report.add(await self._assign.execute(rotation, candidate, dry_run=dry_run))

        logger.info(
            "Batch complete: %d/%d handled, %d failed to assign, %s",
            report.handled, len(report), report.failed,
            ", ".join(f"{status.value}={n}" for status, n in sorted(report.counts().items())),
        )
        return report
