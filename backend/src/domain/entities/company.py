"""
Company Domain Entity
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Company:
    """Company listing - immutable

    Companies are backed by HRD profiles, so the backend may send either the
    plain fields (name, size, ...) or the HRD-prefixed ones (companyName, ...).
    """

    id: str
    name: str
    description: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    size: Optional[str] = None
    website: Optional[str] = None
    logo: Optional[str] = None
    job_openings: int = 0
    is_verified: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Company":
        if "id" not in data:
            raise ValueError("Company payload missing field: id")
        return cls(
            id=str(data["id"]),
            name=data.get("name") or data.get("companyName") or "",
            description=data.get("description") or data.get("companyDescription"),
            industry=data.get("industry"),
            location=data.get("location"),
            size=data.get("size") or data.get("companySize"),
            website=data.get("website") or data.get("companyWebsite"),
            logo=data.get("logo") or data.get("companyLogo"),
            job_openings=data.get("jobOpenings") or 0,
            is_verified=bool(data.get("isVerified", False)),
        )
