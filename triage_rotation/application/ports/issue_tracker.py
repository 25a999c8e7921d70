"""Port interface for issue mutations (assign, comment, subscribe)."""

from abc import ABC, abstractmethod

from triage_rotation.domain.value_objects.message_body import MessageBody


class IssueTrackerPort(ABC):
    @abstractmethod
    async def assign(self, candidate_id: str, actor_id: str) -> None:
        """Set the issue's assignee. Raises on rejection."""
        ...

    @abstractmethod
    async def create_comment(self, candidate_id: str, message: MessageBody) -> None:
        """Post a comment on the issue. Raises on rejection."""
        ...

    @abstractmethod
    async def subscribe(self, candidate_id: str, actor_id: str) -> None:
        """Add the actor as a subscriber of the issue. Raises on rejection."""
        ...
