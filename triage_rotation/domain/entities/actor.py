"""Actor entities — people who can receive triage assignments."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ActorRecord:
    """Raw directory entry as returned by the issue tracker."""

    id: str
    name: str
    email: str | None = None


@dataclass(frozen=True)
class Actor:
    id: str
    display_name: str
    contact_key: str

    @classmethod
    def from_record(cls, record: ActorRecord) -> "Actor":
        if not record.email:
            raise ValueError(f"Directory entry {record.id} has no contact key")
        return cls(id=record.id, display_name=record.name, contact_key=record.email)
