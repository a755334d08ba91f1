"""
Dashboard Loader
Fetches the independent pieces of a dashboard concurrently.

Each piece recovers into its own ResourceState, so one failing call leaves
the others intact.
"""
import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from loguru import logger

from application.services.api_client import ApiClient
from core.exceptions import ApiError


DEFAULT_ERROR = "An error occurred"


@dataclass
class ResourceState:
    """Outcome of one fetch: data on success, error text otherwise"""

    data: Optional[Any] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class JobseekerDashboard:
    profile: ResourceState
    jobs: ResourceState
    applications: ResourceState
    notifications: ResourceState
    saved_jobs: ResourceState


@dataclass
class HrdDashboard:
    profile: ResourceState
    jobs: ResourceState
    applications: ResourceState


async def load(call: Callable[[], Awaitable[Dict[str, Any]]]) -> ResourceState:
    """Run one API call and fold the envelope into a ResourceState"""
    try:
        response = await call()
    except ApiError as e:
        logger.warning(f"Dashboard fetch failed: {e}")
        return ResourceState(error=str(e) or DEFAULT_ERROR)

    if isinstance(response, dict) and response.get("success"):
        return ResourceState(data=response.get("data"))

    error = response.get("error") if isinstance(response, dict) else None
    return ResourceState(error=error or DEFAULT_ERROR)


class DashboardLoader:
    """Loads dashboard data for either role"""

    def __init__(self, client: ApiClient):
        self.client = client

    async def load_jobseeker(self, job_limit: int = 6) -> JobseekerDashboard:
        profile, jobs, applications, notifications, saved_jobs = await asyncio.gather(
            load(self.client.get_profile),
            load(lambda: self.client.get_jobs(limit=job_limit)),
            load(self.client.get_applications),
            load(self.client.get_notifications),
            load(self.client.get_saved_jobs),
        )
        return JobseekerDashboard(
            profile=profile,
            jobs=jobs,
            applications=applications,
            notifications=notifications,
            saved_jobs=saved_jobs,
        )

    async def load_hrd(self) -> HrdDashboard:
        profile, jobs, applications = await asyncio.gather(
            load(self.client.get_profile),
            load(self.client.get_jobs),
            load(self.client.get_applications),
        )
        return HrdDashboard(profile=profile, jobs=jobs, applications=applications)
