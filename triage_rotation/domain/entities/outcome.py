"""Assignment outcome entities — per-candidate results and the batch report."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from triage_rotation.domain.entities.actor import Actor
from triage_rotation.domain.value_objects.enums import MessageFormat, OutcomeStatus

# Statuses where the assignment itself went through.
HANDLED_STATUSES = frozenset(
    {OutcomeStatus.ASSIGNED, OutcomeStatus.NOTIFY_FAILED, OutcomeStatus.FOLLOW_FAILED}
)


@dataclass
class AssignmentOutcome:
    """Summary of one candidate's processing."""

    candidate_id: str
    display_key: str
    selected_actor: Actor
    status: OutcomeStatus
    notification_format: MessageFormat | None = None
    error: str | None = None

    @property
    def assigned(self) -> bool:
        return self.status in HANDLED_STATUSES


@dataclass
class BatchReport:
    outcomes: list[AssignmentOutcome] = field(default_factory=list)

    def add(self, outcome: AssignmentOutcome) -> None:
        self.outcomes.append(outcome)

    def counts(self) -> dict[OutcomeStatus, int]:
        return dict(Counter(o.status for o in self.outcomes))

    @property
    def handled(self) -> int:
        return sum(1 for o in self.outcomes if o.assigned)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.status == OutcomeStatus.ASSIGN_FAILED)

    def __len__(self) -> int:
        return len(self.outcomes)
