"""
Authentication dependencies for FastAPI.
Provides dependency injection for authenticated routes.
"""

from typing import Annotated

from fastapi import Depends, Header

from boibritto.auth.firebase import FirebaseAuth, FirebaseAuthError, get_firebase_auth
from boibritto.errors import UnauthenticatedError
from boibritto.logger import bind_request_context, logger
from boibritto.providers import get_storage_provider


class AuthenticatedUser:
    """Represents a caller whose Firebase ID token has been verified."""

    def __init__(self, decoded_token: dict):
        self.uid: str = decoded_token.get("uid", "")
        self.email: str = decoded_token.get("email", "")
        self.email_verified: bool = decoded_token.get("email_verified", False)
        self.name: str = decoded_token.get("name", "")
        self.picture: str = decoded_token.get("picture", "")
        self.provider: str = decoded_token.get("firebase", {}).get("sign_in_provider", "")
        self._raw_token = decoded_token

    def __repr__(self):
        return f"AuthenticatedUser(uid={self.uid}, email={self.email})"


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
    firebase_auth: FirebaseAuth = Depends(get_firebase_auth),
) -> AuthenticatedUser:
    """
    Dependency to get the current authenticated caller.

    Extracts and verifies the Firebase ID token from the Authorization header.
    Does not require a registered BoiBritto account (used by login/signup).
    """
    if not authorization:
        logger.debug("No authorization header provided")
        raise UnauthenticatedError("unauthorized: missing token")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.debug("Invalid authorization header format")
        raise UnauthenticatedError("unauthorized: invalid authorization header")

    try:
        decoded_token = firebase_auth.verify_token(parts[1])
    except FirebaseAuthError as e:
        logger.warning("Authentication failed", extra={"error": str(e)})
        raise UnauthenticatedError("unauthorized: invalid or expired token") from e

    return AuthenticatedUser(decoded_token)


async def get_registered_user(
    user: AuthenticatedUser = Depends(get_current_user),
) -> dict:
    """
    Dependency returning the stored User record for the caller.

    Rejects callers whose Firebase uid has not signed up yet.
    """
    storage = get_storage_provider()
    record = storage.get_user_by_uid(user.uid)
    if not record:
        logger.info("Token valid but user not registered", extra={"uid": user.uid})
        raise UnauthenticatedError("unauthorized: user not registered")
    bind_request_context(user_id=record["id"])
    return record


# Type aliases for cleaner dependency injection
CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
RegisteredUser = Annotated[dict, Depends(get_registered_user)]
