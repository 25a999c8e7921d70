"""Pytest configuration and shared fixtures."""

import pytest

from triage_rotation.domain.entities.actor import Actor, ActorRecord
from triage_rotation.domain.entities.rotation import Rotation


@pytest.fixture
def alice():
    return Actor(id="u-alice", display_name="Alice", contact_key="alice@example.com")


@pytest.fixture
def bob():
    return Actor(id="u-bob", display_name="Bob", contact_key="bob@example.com")


@pytest.fixture
def carol():
    return Actor(id="u-carol", display_name="Carol", contact_key="carol@example.com")


@pytest.fixture
def rotation(alice, bob, carol):
    return Rotation((alice, bob, carol))


@pytest.fixture
def directory_records():
    return [
        ActorRecord(id="u-alice", name="Alice", email="alice@example.com"),
        ActorRecord(id="u-bob", name="Bob", email="Bob@Example.com"),
        ActorRecord(id="u-carol", name="Carol", email="carol@example.com"),
        ActorRecord(id="u-bot", name="Integration bot", email=None),
    ]
