"""
Authentication module for BoiBritto.
Provides Firebase-based authentication for the application.
"""

from .dependencies import (
    AuthenticatedUser,
    CurrentUser,
    RegisteredUser,
    get_current_user,
    get_registered_user,
)
from .firebase import FirebaseAuth, FirebaseAuthError, get_firebase_auth

__all__ = [
    "FirebaseAuth",
    "FirebaseAuthError",
    "get_firebase_auth",
    "AuthenticatedUser",
    "CurrentUser",
    "RegisteredUser",
    "get_current_user",
    "get_registered_user",
]
