"""MessageBody value object — one renderable form of a notification comment."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from triage_rotation.domain.value_objects.enums import MessageFormat


@dataclass(frozen=True)
class MessageBody:
    format: MessageFormat
    body: str | None = None
    body_data: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        if (self.body is None) == (self.body_data is None):
            raise ValueError("MessageBody needs exactly one of body or body_data")

    def to_comment_input(self) -> dict[str, Any]:
        """Fields to merge into a comment-creation request."""
        if self.body_data is not None:
            return {"bodyData": self.body_data}
        return {"body": self.body}
