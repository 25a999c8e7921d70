"""RoundRobinPolicy — deterministic rotation pick keyed on the issue number."""

from __future__ import annotations

from collections.abc import Sequence

from triage_rotation.domain.entities.actor import Actor
from triage_rotation.domain.entities.candidate import Candidate


def rotation_index(sequence_number: int, length: int) -> int:
    """Map a sequence number onto a rotation slot.

    Uses floor modulo, so the index is always within ``[0, length)`` even for
    negative sequence numbers.

    Raises:
        ValueError: if length is not positive.
    """
    if length <= 0:
        raise ValueError("Cannot select from an empty rotation")
    return ((sequence_number % length) + length) % length


def select(rotation: Sequence[Actor], candidate: Candidate) -> Actor:
    """Pick the actor responsible for *candidate*.

    The pick depends only on the candidate's per-team sequence number and the
    rotation length, never on how many issues were handled before it. A rerun
    over the same issue therefore targets the same actor.

    Args:
        rotation: non-empty, ordered actors.
        candidate: the issue to place.

    Returns:
        ``rotation[sequence_number mod len(rotation)]``

    Raises:
        ValueError: if rotation is empty.
    """
    index = rotation_index(candidate.sequence_number, len(rotation))
    return rotation[index]
