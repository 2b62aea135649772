"""API routers."""

from .chat import router as chat_router
from .health import router as health_router
from .responses_chat import router as responses_chat_router
from .sessions import router as sessions_router

__all__ = [
    "chat_router",
    "health_router",
    "responses_chat_router",
    "sessions_router",
]
