from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

Role = Literal["user", "assistant"]
Status = Literal["active", "closed"]


@dataclass(frozen=True)
class Message:
    role: Role
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        return cls(role=data.get("role", "assistant"), content=data.get("content", ""))


@dataclass
class Consultation:
    """A consultation session row as stored in the ``consultations`` collection."""
    id: str
    owner_id: str
    topic: str
    messages: List[Message] = field(default_factory=list)
    status: Status = "active"
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Consultation":
        messages = record.get("messages") or []
        return cls(
            id=record["id"],
            owner_id=record["owner_id"],
            topic=record.get("topic", ""),
            messages=[Message.from_dict(m) for m in messages if isinstance(m, dict)],
            status=record.get("status", "active"),
            created_at=record.get("created_at"),
            updated_at=record.get("updated_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "owner_id": self.owner_id,
            "topic": self.topic,
            "messages": [m.to_dict() for m in self.messages],
            "status": self.status,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


@dataclass(frozen=True)
class ProfileContext:
    """Authenticated identity handed to every operation that needs an owner."""
    id: str
    email: Optional[str] = None
    full_name: Optional[str] = None

    @property
    def first_name(self) -> str:
        if self.full_name and self.full_name.split():
            return self.full_name.split()[0]
        return "there"
