"""
Domain Enums
Business enumerations mirrored from the backend API
"""
import re
from enum import Enum
from typing import Dict, Optional


class UserRole(str, Enum):
    """Account roles"""
    JOBSEEKER = "JOBSEEKER"
    HRD = "HRD"


class _LabelledEnum(str, Enum):
    """Enum whose wire value is UPPER_SNAKE and which also has a display label.

    The backend speaks "FULL_TIME" while filters and older screens use
    "Full-time"; parse() accepts both and returns the canonical member.
    """

    @classmethod
    def labels(cls) -> Dict["_LabelledEnum", str]:
        return {}

    @property
    def label(self) -> str:
        return self.labels().get(self, self.value)

    @classmethod
    def parse(cls, value: Optional[str]):
        """Return the member for a wire value or display label, or None"""
        if value is None:
            return None
        if isinstance(value, cls):
            return value
        key = _normalize(value)
        for member in cls:
            if key in (_normalize(member.value), _normalize(member.label)):
                return member
        raise ValueError(f"Unknown {cls.__name__}: {value!r}")


def _normalize(value: str) -> str:
    return re.sub(r"[^a-z0-9]", "", value.lower())


class JobType(_LabelledEnum):
    """Employment type of a job posting"""
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    FREELANCE = "FREELANCE"
    INTERNSHIP = "INTERNSHIP"

    @classmethod
    def labels(cls):
        return JOB_TYPE_LABELS


class WorkMode(_LabelledEnum):
    """Where the work happens"""
    ONSITE = "ONSITE"
    REMOTE = "REMOTE"
    HYBRID = "HYBRID"

    @classmethod
    def labels(cls):
        return WORK_MODE_LABELS


class ExperienceLevel(_LabelledEnum):
    """Seniority expected by a job posting"""
    ENTRY = "ENTRY"
    MID = "MID"
    SENIOR = "SENIOR"
    LEAD = "LEAD"
    EXECUTIVE = "EXECUTIVE"

    @classmethod
    def labels(cls):
        return EXPERIENCE_LEVEL_LABELS


class ApplicationStatus(str, Enum):
    """Status of a job application as reported by the backend"""
    PENDING = "PENDING"
    REVIEWED = "REVIEWED"
    SHORTLISTED = "SHORTLISTED"
    INTERVIEW = "INTERVIEW"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"


JOB_TYPE_LABELS: Dict[JobType, str] = {
    JobType.FULL_TIME: "Full-time",
    JobType.PART_TIME: "Part-time",
    JobType.CONTRACT: "Contract",
    JobType.FREELANCE: "Freelance",
    JobType.INTERNSHIP: "Internship",
}

WORK_MODE_LABELS: Dict[WorkMode, str] = {
    WorkMode.ONSITE: "On-site",
    WorkMode.REMOTE: "Remote",
    WorkMode.HYBRID: "Hybrid",
}

EXPERIENCE_LEVEL_LABELS: Dict[ExperienceLevel, str] = {
    ExperienceLevel.ENTRY: "Entry Level",
    ExperienceLevel.MID: "Mid Level",
    ExperienceLevel.SENIOR: "Senior Level",
    ExperienceLevel.LEAD: "Lead/Principal",
    ExperienceLevel.EXECUTIVE: "Executive",
}
