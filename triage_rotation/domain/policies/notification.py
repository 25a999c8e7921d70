"""NotificationPolicy — build the comment that tells an actor they own an issue.

Two renderings are produced, in order of preference:

1. a rich-text document with an inline mention node, which the tracker turns
   into a live @-mention;
2. a Markdown link to the actor's profile page, for workspaces that reject
   the rich-text form.
"""

from __future__ import annotations

from typing import Any

from triage_rotation.domain.entities.actor import Actor
from triage_rotation.domain.value_objects.enums import MessageFormat
from triage_rotation.domain.value_objects.message_body import MessageBody

REQUEST_TEXT = "please triage this issue in the next 48 hours."
ROTATION_NOTE = "This is assigned automatically in a round-robin based on inbound tickets."
PROFILE_URL_TEMPLATE = "https://linear.app/{slug}/people/{actor_id}"
PLACEHOLDER_SLUG = "<your-slug>"


def _text(value: str) -> dict[str, Any]:
    return {"type": "text", "text": value}


def _paragraph(*nodes: dict[str, Any]) -> dict[str, Any]:
    return {"type": "paragraph", "content": list(nodes)}


class NotificationComposer:
    """Composes notification bodies for an actor."""

    def __init__(self, workspace_slug: str | None = None):
        self._slug = workspace_slug or PLACEHOLDER_SLUG

    def mention(self, actor: Actor) -> MessageBody:
        # Most workspaces accept a mention node carrying just the user id.
        doc = {
            "type": "doc",
            "content": [
                _paragraph(
                    {"type": "mention", "attrs": {"id": actor.id}},
                    _text(f", {REQUEST_TEXT}"),
                ),
                _paragraph(_text(f"({ROTATION_NOTE})")),
            ],
        }
        return MessageBody(format=MessageFormat.MENTION, body_data=doc)

    def profile_url(self, actor: Actor) -> str:
        return PROFILE_URL_TEMPLATE.format(slug=self._slug, actor_id=actor.id)

    def profile_link(self, actor: Actor) -> MessageBody:
        body = (
            f"[{actor.display_name}]({self.profile_url(actor)}) {REQUEST_TEXT}\n\n"
            f"_({ROTATION_NOTE})_"
        )
        return MessageBody(format=MessageFormat.MARKDOWN, body=body)

    def compose(self, actor: Actor) -> list[MessageBody]:
        """Ordered notification strategies: try each until one is accepted."""
        return [self.mention(actor), self.profile_link(actor)]
