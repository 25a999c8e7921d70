"""Tests for AssignCandidateUseCase / BatchAssignUseCase with in-memory fakes."""

from __future__ import annotations

import logging

import pytest

from triage_rotation.application.ports.candidate_source import CandidateSourcePort
from triage_rotation.application.ports.issue_tracker import IssueTrackerPort
from triage_rotation.application.use_cases.assign_candidates import (
    AssignCandidateUseCase,
    BatchAssignUseCase,
)
from triage_rotation.domain.entities.candidate import Candidate
from triage_rotation.domain.errors import TrackerApiError
from triage_rotation.domain.policies.notification import NotificationComposer
from triage_rotation.domain.value_objects.enums import MessageFormat, OutcomeStatus

# ─── In-memory fakes ────────────────────────────────────────────────


class FakeSource(CandidateSourcePort):
    def __init__(self, candidates: list[Candidate]):
        self._candidates = candidates
        self.calls: list[tuple[str, int]] = []

    async def list_candidates(self, team_id, limit):
        self.calls.append((team_id, limit))
        return list(self._candidates[:limit])


class FakeTracker(IssueTrackerPort):
    """Records every call; fails the ones configured to fail."""

    def __init__(
        self,
        fail_assign: set[str] | None = None,
        reject_formats: set[MessageFormat] | None = None,
        fail_subscribe: bool = False,
    ):
        self._fail_assign = fail_assign or set()
        self._reject_formats = reject_formats or set()
        self._fail_subscribe = fail_subscribe
        self.assignments: dict[str, str] = {}
        self.comment_attempts: list[tuple[str, MessageFormat]] = []
        self.comments: list[tuple[str, MessageFormat]] = []
        self.subscriptions: list[tuple[str, str]] = []

    async def assign(self, candidate_id, actor_id):
        if candidate_id in self._fail_assign:
            raise TrackerApiError(f"issueUpdate rejected for {candidate_id}")
        self.assignments[candidate_id] = actor_id

    async def create_comment(self, candidate_id, message):
        self.comment_attempts.append((candidate_id, message.format))
        if message.format in self._reject_formats:
            raise TrackerApiError(f"{message.format.value} body rejected")
        self.comments.append((candidate_id, message.format))

    async def subscribe(self, candidate_id, actor_id):
        if self._fail_subscribe:
            raise TrackerApiError("subscriberIds not supported")
        self.subscriptions.append((candidate_id, actor_id))


def _issue(number: int) -> Candidate:
    return Candidate(id=f"id-{number}", display_key=f"ENG-{number}", sequence_number=number)


def _make_batch(tracker, candidates, subscribe=True, page_size=100):
    assign = AssignCandidateUseCase(
        tracker=tracker,
        composer=NotificationComposer("acme"),
        subscribe_assignee=subscribe,
    )
    source = FakeSource(candidates)
    return BatchAssignUseCase(assign, source, team_id="team-1", page_size=page_size), source


# ─── Tests ───────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_round_robin_by_sequence_number(rotation):
    """seq 10 → Bob, 11 → Carol, 12 → Alice, 13 → Bob."""
    tracker = FakeTracker()
    batch, _ = _make_batch(tracker, [_issue(n) for n in (10, 11, 12, 13)])

    report = await batch.execute(rotation)

    assert [o.selected_actor.display_name for o in report.outcomes] == [
        "Bob", "Carol", "Alice", "Bob",
    ]
    assert tracker.assignments == {
        "id-10": "u-bob", "id-11": "u-carol", "id-12": "u-alice", "id-13": "u-bob",
    }
    assert all(o.status == OutcomeStatus.ASSIGNED for o in report.outcomes)


@pytest.mark.asyncio
async def test_assignment_failure_does_not_stop_batch(rotation):
    """Second candidate fails to assign; first and third still go through."""
    tracker = FakeTracker(fail_assign={"id-2"})
    batch, _ = _make_batch(tracker, [_issue(1), _issue(2), _issue(3)])

    report = await batch.execute(rotation)

    assert [o.status for o in report.outcomes] == [
        OutcomeStatus.ASSIGNED,
        OutcomeStatus.ASSIGN_FAILED,
        OutcomeStatus.ASSIGNED,
    ]
    assert "id-3" in tracker.assignments
    assert "issueUpdate rejected" in report.outcomes[1].error
    assert report.handled == 2
    assert report.failed == 1


@pytest.mark.asyncio
async def test_no_comment_or_follow_after_failed_assignment(rotation):
    tracker = FakeTracker(fail_assign={"id-5"})
    batch, _ = _make_batch(tracker, [_issue(5)])

    report = await batch.execute(rotation)

    assert report.outcomes[0].status == OutcomeStatus.ASSIGN_FAILED
    assert tracker.comment_attempts == []
    assert tracker.subscriptions == []


@pytest.mark.asyncio
async def test_mention_is_posted_first(rotation):
    tracker = FakeTracker()
    batch, _ = _make_batch(tracker, [_issue(4)])

    report = await batch.execute(rotation)

    assert tracker.comments == [("id-4", MessageFormat.MENTION)]
    assert report.outcomes[0].notification_format == MessageFormat.MENTION


@pytest.mark.asyncio
async def test_markdown_fallback_tried_once_when_mention_rejected(rotation):
    tracker = FakeTracker(reject_formats={MessageFormat.MENTION})
    batch, _ = _make_batch(tracker, [_issue(7)])

    report = await batch.execute(rotation)

    outcome = report.outcomes[0]
    assert outcome.status == OutcomeStatus.ASSIGNED
    assert outcome.notification_format == MessageFormat.MARKDOWN
    assert tracker.comment_attempts == [
        ("id-7", MessageFormat.MENTION),
        ("id-7", MessageFormat.MARKDOWN),
    ]
    assert tracker.comments == [("id-7", MessageFormat.MARKDOWN)]


@pytest.mark.asyncio
async def test_both_notifications_rejected_keeps_assignment(rotation):
    tracker = FakeTracker(reject_formats={MessageFormat.MENTION, MessageFormat.MARKDOWN})
    batch, _ = _make_batch(tracker, [_issue(8), _issue(9)])

    report = await batch.execute(rotation)

    assert [o.status for o in report.outcomes] == [
        OutcomeStatus.NOTIFY_FAILED, OutcomeStatus.NOTIFY_FAILED,
    ]
    assert tracker.assignments == {"id-8": "u-carol", "id-9": "u-alice"}
    assert report.outcomes[0].notification_format is None
    assert "markdown body rejected" in report.outcomes[0].error
    assert report.handled == 2


@pytest.mark.asyncio
async def test_follow_failure_is_not_escalated(rotation):
    tracker = FakeTracker(fail_subscribe=True)
    batch, _ = _make_batch(tracker, [_issue(1), _issue(2)])

    report = await batch.execute(rotation)

    assert [o.status for o in report.outcomes] == [
        OutcomeStatus.FOLLOW_FAILED, OutcomeStatus.FOLLOW_FAILED,
    ]
    assert len(tracker.comments) == 2
    assert report.handled == 2
    assert report.failed == 0


@pytest.mark.asyncio
async def test_notify_failure_wins_over_follow_failure(rotation):
    tracker = FakeTracker(
        reject_formats={MessageFormat.MENTION, MessageFormat.MARKDOWN},
        fail_subscribe=True,
    )
    batch, _ = _make_batch(tracker, [_issue(1)])

    report = await batch.execute(rotation)

    assert report.outcomes[0].status == OutcomeStatus.NOTIFY_FAILED


@pytest.mark.asyncio
async def test_subscribe_adds_assignee(rotation):
    tracker = FakeTracker()
    batch, _ = _make_batch(tracker, [_issue(3)])

    await batch.execute(rotation)

    assert tracker.subscriptions == [("id-3", "u-alice")]


@pytest.mark.asyncio
async def test_subscribe_can_be_disabled(rotation):
    tracker = FakeTracker(fail_subscribe=True)
    batch, _ = _make_batch(tracker, [_issue(3)], subscribe=False)

    report = await batch.execute(rotation)

    assert tracker.subscriptions == []
    assert report.outcomes[0].status == OutcomeStatus.ASSIGNED


@pytest.mark.asyncio
async def test_rerun_targets_same_actor(rotation):
    """A candidate still listed on a second run goes to the same actor again."""
    candidates = [_issue(21), _issue(22)]
    first_tracker = FakeTracker(fail_assign={"id-22"})
    first, _ = _make_batch(first_tracker, candidates)
    first_report = await first.execute(rotation)

    second_tracker = FakeTracker()
    second, _ = _make_batch(second_tracker, candidates)
    second_report = await second.execute(rotation)

    assert [o.selected_actor for o in first_report.outcomes] == [
        o.selected_actor for o in second_report.outcomes
    ]
    assert second_tracker.assignments["id-21"] == first_tracker.assignments["id-21"]


@pytest.mark.asyncio
async def test_dry_run_changes_nothing(rotation):
    tracker = FakeTracker()
    batch, _ = _make_batch(tracker, [_issue(10), _issue(11)])

    report = await batch.execute(rotation, dry_run=True)

    assert [o.status for o in report.outcomes] == [OutcomeStatus.PLANNED] * 2
    assert [o.selected_actor.display_name for o in report.outcomes] == ["Bob", "Carol"]
    assert tracker.assignments == {}
    assert tracker.comment_attempts == []
    assert tracker.subscriptions == []


@pytest.mark.asyncio
async def test_empty_batch(rotation):
    tracker = FakeTracker()
    batch, source = _make_batch(tracker, [])

    report = await batch.execute(rotation)

    assert len(report) == 0
    assert source.calls == [("team-1", 100)]


@pytest.mark.asyncio
async def test_candidates_fetched_once_with_page_size(rotation):
    tracker = FakeTracker()
    batch, source = _make_batch(tracker, [_issue(n) for n in range(10)], page_size=4)

    report = await batch.execute(rotation)

    assert source.calls == [("team-1", 4)]
    assert len(report) == 4


@pytest.mark.asyncio
async def test_single_candidate_use_case(rotation):
    tracker = FakeTracker()
    uc = AssignCandidateUseCase(tracker, NotificationComposer())

    outcome = await uc.execute(rotation, _issue(14))

    assert outcome.candidate_id == "id-14"
    assert outcome.display_key == "ENG-14"
    assert outcome.selected_actor.id == "u-carol"
    assert outcome.status == OutcomeStatus.ASSIGNED


@pytest.mark.asyncio
async def test_log_line_includes_issue_title(rotation, caplog):
    caplog.set_level(logging.INFO)
    tracker = FakeTracker()
    uc = AssignCandidateUseCase(tracker, NotificationComposer())
    candidate = Candidate(id="id-10", display_key="ENG-10", sequence_number=10, title="Login crash")

    await uc.execute(rotation, candidate)

    assert "- ENG-10 (Login crash): assigning to Bob (u-bob) [idx=1]" in caplog.text


@pytest.mark.asyncio
async def test_batch_summary_reports_failed_count(rotation, caplog):
    caplog.set_level(logging.INFO)
    tracker = FakeTracker(fail_assign={"id-2"})
    batch, _ = _make_batch(tracker, [_issue(1), _issue(2), _issue(3)])

    await batch.execute(rotation)

    assert "Batch complete: 2/3 handled, 1 failed to assign" in caplog.text
