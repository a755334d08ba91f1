"""
User Domain Entity
Immutable user object as returned by the backend
"""
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from ..enums import UserRole


@dataclass(frozen=True)
class User:
    """User domain entity - immutable"""

    id: str
    email: str
    first_name: str
    last_name: str
    role: UserRole
    profile_complete: bool = False
    profile_picture: Optional[str] = None
    company_name: Optional[str] = None
    slug: Optional[str] = None

    def __post_init__(self):
        """Validate user data"""
        if not self.id:
            raise ValueError("User id cannot be empty")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def is_hrd(self) -> bool:
        return self.role == UserRole.HRD

    @property
    def is_jobseeker(self) -> bool:
        return self.role == UserRole.JOBSEEKER

    def with_updates(self, **changes: Any) -> "User":
        """Return a copy with the given fields replaced"""
        if "role" in changes:
            changes["role"] = UserRole(changes["role"])
        return replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        """Build from the backend's camelCase payload"""
        try:
            return cls(
                id=str(data["id"]),
                email=data["email"],
                first_name=data.get("firstName") or "",
                last_name=data.get("lastName") or "",
                role=UserRole(data["role"]),
                profile_complete=bool(data.get("profileComplete", False)),
                profile_picture=data.get("profilePicture"),
                company_name=data.get("companyName"),
                slug=data.get("slug"),
            )
        except KeyError as e:
            raise ValueError(f"User payload missing field: {e.args[0]}") from e

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "role": self.role.value,
            "profileComplete": self.profile_complete,
        }
        optional = {
            "profilePicture": self.profile_picture,
            "companyName": self.company_name,
            "slug": self.slug,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data

    def __str__(self) -> str:
        return f"User({self.email}, {self.role.value})"
