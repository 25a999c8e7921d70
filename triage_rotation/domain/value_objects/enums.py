"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class OutcomeStatus(str, Enum):
    ASSIGNED = "assigned"
    ASSIGN_FAILED = "assign_failed"
    NOTIFY_FAILED = "notify_failed"
    FOLLOW_FAILED = "follow_failed"
    PLANNED = "planned"


class MessageFormat(str, Enum):
    MENTION = "mention"
    MARKDOWN = "markdown"
