"""Linear adapter — implements the directory, candidate and tracker ports over GraphQL."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from triage_rotation.adapters.linear.schema import (
    GraphQLResponse,
    IssuesData,
    MutationPayload,
    UsersData,
)
from triage_rotation.application.ports.candidate_source import CandidateSourcePort
from triage_rotation.application.ports.directory_port import DirectoryPort
from triage_rotation.application.ports.issue_tracker import IssueTrackerPort
from triage_rotation.domain.entities.actor import ActorRecord
from triage_rotation.domain.entities.candidate import Candidate
from triage_rotation.domain.errors import PayloadValidationError, TrackerApiError
from triage_rotation.domain.value_objects.message_body import MessageBody

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

LINEAR_API_URL = "https://api.linear.app/graphql"
USERS_PAGE_SIZE = 250
TRIAGE_STATE_TYPE = "triage"

USERS_QUERY = """
query Users($first: Int!) {
  users(first: $first) {
    nodes { id name email }
  }
}
"""

TRIAGE_ISSUES_QUERY = """
query TriageIssues($filter: IssueFilter, $first: Int!) {
  issues(filter: $filter, orderBy: createdAt, first: $first) {
    nodes { id identifier number title }
  }
}
"""

ISSUE_UPDATE_MUTATION = """
mutation IssueUpdate($id: String!, $input: IssueUpdateInput!) {
  issueUpdate(id: $id, input: $input) { success }
}
"""

COMMENT_CREATE_MUTATION = """
mutation CommentCreate($input: CommentCreateInput!) {
  commentCreate(input: $input) { success }
}
"""


def triage_filter(team_id: str) -> dict[str, Any]:
    """Issue filter: team matches, no assignee, workflow state of type triage."""
    return {
        "team": {"id": {"eq": team_id}},
        "assignee": {"null": True},
        "state": {"type": {"eq": TRIAGE_STATE_TYPE}},
    }


class LinearAdapter(DirectoryPort, CandidateSourcePort, IssueTrackerPort):
    """Linear GraphQL client.

    Owns its ``httpx.AsyncClient`` when used as an async context manager;
    an existing client can be injected instead.
    """

    def __init__(
        self,
        api_key: str,
        api_url: str = LINEAR_API_URL,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ):
        self._api_key = api_key
        self._api_url = api_url
        self._timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self) -> LinearAdapter:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    # ─── Ports ──────────────────────────────────────────────────────

    async def list_actors(self) -> list[ActorRecord]:
        data = await self._execute(USERS_QUERY, {"first": USERS_PAGE_SIZE})
        users = self._parse(UsersData, data, "users")
        return [node.to_record() for node in users.users.nodes]

    async def list_candidates(self, team_id: str, limit: int) -> list[Candidate]:
        data = await self._execute(
            TRIAGE_ISSUES_QUERY, {"filter": triage_filter(team_id), "first": limit}
        )
        issues = self._parse(IssuesData, data, "issues")
        return [node.to_candidate() for node in issues.issues.nodes]

    async def assign(self, candidate_id: str, actor_id: str) -> None:
        await self._update_issue(candidate_id, {"assigneeId": actor_id})

    async def create_comment(self, candidate_id: str, message: MessageBody) -> None:
        payload = {"issueId": candidate_id, **message.to_comment_input()}
        data = await self._execute(COMMENT_CREATE_MUTATION, {"input": payload})
        self._require_success(data, "commentCreate")

    async def subscribe(self, candidate_id: str, actor_id: str) -> None:
        await self._update_issue(candidate_id, {"subscriberIds": [actor_id]})

    # ─── Transport ──────────────────────────────────────────────────

    async def _update_issue(self, issue_id: str, update: dict[str, Any]) -> None:
        data = await self._execute(ISSUE_UPDATE_MUTATION, {"id": issue_id, "input": update})
        self._require_success(data, "issueUpdate")

    async def _execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """POST one GraphQL operation and return its ``data`` object."""
        if self._client is None:
            raise RuntimeError("LinearAdapter is not open; use 'async with'")

        try:
            response = await self._client.post(
                self._api_url,
                json={"query": query, "variables": variables},
                headers={"Authorization": self._api_key},
                timeout=self._timeout,
            )
        except httpx.HTTPError as e:
            raise TrackerApiError(f"Linear request failed: {e}") from e

        try:
            body = GraphQLResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            if response.is_error:
                raise TrackerApiError(f"Linear returned HTTP {response.status_code}") from e
            raise PayloadValidationError(f"Unexpected Linear response: {e}") from e

        if body.errors:
            messages = "; ".join(err.message for err in body.errors)
            raise TrackerApiError(f"Linear GraphQL error: {messages}")
        if response.is_error:
            raise TrackerApiError(f"Linear returned HTTP {response.status_code}")
        if body.data is None:
            raise PayloadValidationError("Linear response has no data")
        return body.data

    @staticmethod
    def _parse(model: type[ModelT], data: dict[str, Any], what: str) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise PayloadValidationError(f"Malformed {what} payload: {e}") from e

    @classmethod
    def _require_success(cls, data: dict[str, Any], field: str) -> None:
        payload = cls._parse(MutationPayload, data.get(field) or {}, field)
        if not payload.success:
            raise TrackerApiError(f"Linear {field} reported success=false")
        logger.debug("%s ok", field)
