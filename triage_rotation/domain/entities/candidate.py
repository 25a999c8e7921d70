"""Candidate entity — an unassigned triage issue awaiting an assignee."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Candidate:
    id: str
    display_key: str
    sequence_number: int
    title: str | None = None
