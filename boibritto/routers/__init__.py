"""
Routers package for BoiBritto.
Contains FastAPI routers for different API endpoints.
"""

from .auth import router as auth_router
from .blogs import router as blogs_router
from .chapters import router as chapters_router
from .collections import router as collections_router
from .comments import router as comments_router
from .discussions import router as discussions_router
from .profile import router as profile_router
from .reading_list import router as reading_list_router
from .reports import router as reports_router
from .user_books import router as user_books_router

__all__ = [
    "auth_router",
    "profile_router",
    "user_books_router",
    "chapters_router",
    "discussions_router",
    "comments_router",
    "reports_router",
    "blogs_router",
    "collections_router",
    "reading_list_router",
]
