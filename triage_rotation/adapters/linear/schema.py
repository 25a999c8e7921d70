"""Pydantic models for Linear GraphQL payloads.

Responses are validated here, at the adapter boundary, so that the domain only
ever sees well-formed records.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from triage_rotation.domain.entities.actor import ActorRecord
from triage_rotation.domain.entities.candidate import Candidate


class _Node(BaseModel):
    model_config = ConfigDict(extra="ignore")


class UserNode(_Node):
    id: str
    name: str
    email: str | None = None

    def to_record(self) -> ActorRecord:
        return ActorRecord(id=self.id, name=self.name, email=self.email)


class IssueNode(_Node):
    id: str
    identifier: str
    number: int
    title: str | None = None

    def to_candidate(self) -> Candidate:
        return Candidate(
            id=self.id,
            display_key=self.identifier,
            sequence_number=self.number,
            title=self.title,
        )


class UserConnection(_Node):
    nodes: list[UserNode] = Field(default_factory=list)


class IssueConnection(_Node):
    nodes: list[IssueNode] = Field(default_factory=list)


class UsersData(_Node):
    users: UserConnection


class IssuesData(_Node):
    issues: IssueConnection


class MutationPayload(_Node):
    success: bool


class GraphQLError(_Node):
    message: str
    extensions: dict[str, Any] | None = None


class GraphQLResponse(_Node):
    data: dict[str, Any] | None = None
    errors: list[GraphQLError] | None = None
