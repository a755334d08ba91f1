"""Domain Entities - DTOs mirrored from the backend API"""

from .user import User
from .job import Job
from .application import Application
from .company import Company
from .notification import Notification
__all__ = ["User", "Job", "Application", "Company", "Notification"]
