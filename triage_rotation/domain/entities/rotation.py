"""Rotation entity — the ordered list of actors that share triage duty."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from triage_rotation.domain.entities.actor import Actor


@dataclass(frozen=True)
class Rotation:
    """Ordered, non-empty sequence of actors.

    Order is configuration order. Duplicates are kept: an actor listed twice
    gets twice the share of assignments.
    """

    actors: tuple[Actor, ...]

    def __post_init__(self) -> None:
        if not self.actors:
            raise ValueError("Rotation must contain at least one actor")

    def __len__(self) -> int:
        return len(self.actors)

    def __getitem__(self, index: int) -> Actor:
        return self.actors[index]

    def __iter__(self) -> Iterator[Actor]:
        return iter(self.actors)

    def describe(self) -> str:
        return " -> ".join(a.contact_key for a in self.actors)
