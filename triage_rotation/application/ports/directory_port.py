"""Port interface for the people directory of the issue tracker."""

from abc import ABC, abstractmethod

from triage_rotation.domain.entities.actor import ActorRecord


class DirectoryPort(ABC):
    @abstractmethod
    async def list_actors(self) -> list[ActorRecord]:
        """Return every known directory entry in a single call."""
        ...
