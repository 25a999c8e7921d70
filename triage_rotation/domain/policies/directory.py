"""DirectoryPolicy — resolve configured contact keys against a directory snapshot."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from triage_rotation.domain.entities.actor import Actor, ActorRecord
from triage_rotation.domain.entities.rotation import Rotation
from triage_rotation.domain.errors import UnknownIdentityError


def normalize_contact_key(key: str) -> str:
    return key.strip().lower()


def build_lookup(records: Iterable[ActorRecord]) -> dict[str, Actor]:
    """Index directory entries by lower-cased email.

    Entries without an email cannot be targeted and are skipped.
    """
    lookup: dict[str, Actor] = {}
    for record in records:
        if not record.email:
            continue
        lookup[normalize_contact_key(record.email)] = Actor.from_record(record)
    return lookup


def resolve_rotation(
    contact_keys: Sequence[str],
    records: Iterable[ActorRecord],
) -> Rotation:
    """Turn configured contact keys into a Rotation, in configuration order.

    Matching is case-insensitive. Duplicate keys yield duplicate entries.

    Raises:
        ValueError: if contact_keys is empty.
        UnknownIdentityError: listing every key without a directory match.
    """
    if not contact_keys:
        raise ValueError("Cannot build a rotation from an empty contact list")

    lookup = build_lookup(records)
    missing = [k for k in contact_keys if normalize_contact_key(k) not in lookup]
    if missing:
        raise UnknownIdentityError(missing)

    return Rotation(tuple(lookup[normalize_contact_key(k)] for k in contact_keys))
