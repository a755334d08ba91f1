"""
Job Domain Entity
Immutable job posting as listed by the backend
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..enums import ExperienceLevel, JobType, WorkMode


@dataclass(frozen=True)
class Job:
    """Job posting domain entity - immutable"""

    id: str
    title: str
    company_name: str
    location: str
    job_type: Optional[JobType] = None
    work_mode: Optional[WorkMode] = None
    experience_level: Optional[ExperienceLevel] = None

    # Compensation
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None

    # Details
    skills: List[str] = field(default_factory=list)
    description: Optional[str] = None
    requirements: Optional[str] = None
    benefits: Optional[str] = None

    is_active: bool = True
    created_at: Optional[str] = None
    application_count: int = 0

    def salary_label(self) -> str:
        """Human readable salary range in thousands of dollars"""
        low, high = self.salary_min, self.salary_max
        if low and high:
            return f"${low / 1000:.0f}k - ${high / 1000:.0f}k"
        if low:
            return f"${low / 1000:.0f}k+"
        if high:
            return f"Up to ${high / 1000:.0f}k"
        return "Competitive"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Job":
        """Build from the backend's camelCase payload"""
        try:
            return cls(
                id=str(data["id"]),
                title=data["title"],
                company_name=data.get("companyName") or "",
                location=data.get("location") or "",
                job_type=JobType.parse(data.get("jobType")),
                work_mode=WorkMode.parse(data.get("workMode")),
                experience_level=ExperienceLevel.parse(data.get("experienceLevel")),
                salary_min=data.get("salaryMin"),
                salary_max=data.get("salaryMax"),
                skills=list(data.get("skills") or []),
                description=data.get("description"),
                requirements=data.get("requirements"),
                benefits=data.get("benefits"),
                is_active=data.get("isActive", True),
                created_at=data.get("createdAt"),
                application_count=(data.get("_count") or {}).get("applications", 0),
            )
        except KeyError as e:
            raise ValueError(f"Job payload missing field: {e.args[0]}") from e

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "companyName": self.company_name,
            "location": self.location,
            "jobType": self.job_type.value if self.job_type else None,
            "workMode": self.work_mode.value if self.work_mode else None,
            "experienceLevel": self.experience_level.value if self.experience_level else None,
            "salaryMin": self.salary_min,
            "salaryMax": self.salary_max,
            "skills": list(self.skills),
            "description": self.description,
            "requirements": self.requirements,
            "benefits": self.benefits,
            "isActive": self.is_active,
            "createdAt": self.created_at,
        }
