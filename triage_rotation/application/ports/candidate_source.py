"""Port interface for fetching issues eligible for assignment."""

from abc import ABC, abstractmethod

from triage_rotation.domain.entities.candidate import Candidate


class CandidateSourcePort(ABC):
    @abstractmethod
    async def list_candidates(self, team_id: str, limit: int) -> list[Candidate]:
        """Return one page of unassigned triage issues for the team.

        Ordered by creation time. Never follows pagination.
        """
        ...
