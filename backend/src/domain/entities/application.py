"""
Application Domain Entity
Immutable job application business object
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..enums import ApplicationStatus


@dataclass(frozen=True)
class Application:
    """Job application domain entity - immutable"""

    id: str
    status: ApplicationStatus
    job_id: Optional[str] = None
    applied_at: Optional[str] = None

    # Denormalized job summary
    job_title: Optional[str] = None
    company_name: Optional[str] = None

    cover_letter: Optional[str] = None

    def is_pending(self) -> bool:
        """Check if application is pending"""
        return self.status == ApplicationStatus.PENDING

    def is_terminal(self) -> bool:
        """Check if application reached a final decision"""
        return self.status in {ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Application":
        job = data.get("job") or {}
        try:
            return cls(
                id=str(data["id"]),
                status=ApplicationStatus(data["status"]),
                job_id=data.get("jobId") or job.get("id"),
                applied_at=data.get("appliedAt"),
                job_title=job.get("title"),
                company_name=job.get("companyName"),
                cover_letter=data.get("coverLetter"),
            )
        except KeyError as e:
            raise ValueError(f"Application payload missing field: {e.args[0]}") from e
