"""ResolveRotationUseCase — turn configured emails into an ordered Rotation."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from triage_rotation.application.ports.directory_port import DirectoryPort
from triage_rotation.domain.entities.rotation import Rotation
from triage_rotation.domain.policies.directory import resolve_rotation

logger = logging.getLogger(__name__)


class ResolveRotationUseCase:
    def __init__(self, directory: DirectoryPort):
        self._directory = directory

    async def execute(self, contact_keys: Sequence[str]) -> Rotation:
        """Fetch the directory once and resolve *contact_keys* against it.

        Raises:
            UnknownIdentityError: if any key has no directory match.
        """
        records = await self._directory.list_actors()
        logger.debug("Directory returned %d entries", len(records))
        rotation = resolve_rotation(contact_keys, records)
        logger.info("Rotation order (%d): %s", len(rotation), rotation.describe())
        for position, actor in enumerate(rotation):
            logger.debug("  [%d] %s (%s)", position, actor.display_name, actor.id)
        return rotation
