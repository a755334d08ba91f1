"""
Notification Domain Entity
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Notification:
    """In-app notification - immutable"""

    id: str
    title: str
    message: str
    is_read: bool = False
    created_at: Optional[str] = None
    type: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Notification":
        try:
            return cls(
                id=str(data["id"]),
                title=data["title"],
                message=data.get("message") or "",
                is_read=bool(data.get("isRead", False)),
                created_at=data.get("createdAt"),
                type=data.get("type"),
            )
        except KeyError as e:
            raise ValueError(f"Notification payload missing field: {e.args[0]}") from e
