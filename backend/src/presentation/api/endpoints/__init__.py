"""Gateway routers"""
from .auth import router as auth_router
from .profile import router as profile_router
from .proxy import router as proxy_router
from .session import router as session_router

__all__ = ["auth_router", "profile_router", "proxy_router", "session_router"]
