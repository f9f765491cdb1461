"""
Authentication API router.
Login check and sign-up for Firebase-authenticated callers.
"""

from fastapi import APIRouter, status

from boibritto.auth import CurrentUser
from boibritto.errors import ConflictError, ValidationError
from boibritto.logger import logger
from boibritto.models import SignupRequest, UserOut, dump
from boibritto.providers import DuplicateRecordError, get_storage_provider
from boibritto.responses import send_success
from boibritto.services.validators import validate_genres

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.get("/login")
async def login(user: CurrentUser):
    """Report whether the token's uid already has a BoiBritto account."""
    storage = get_storage_provider()
    existing = storage.get_user_by_uid(user.uid)
    return send_success(
        "User login successful",
        {
            "newUser": existing is None,
            "user": dump(UserOut, existing) if existing else None,
        },
    )


@router.post("/signup")
async def signup(user: CurrentUser, request: SignupRequest):
    """
    Register the caller.

    Email, display name and avatar are taken from the verified token.
    """
    storage = get_storage_provider()
    if storage.get_user_by_uid(user.uid):
        raise ValidationError("User already exists")

    genres = validate_genres(request.interested_genres)
    try:
        created = storage.create_user(
            {
                "uid": user.uid,
                "email": user.email,
                "display_name": user.name or request.username,
                "avatar": user.picture or None,
                "username": request.username,
                "bio": request.bio,
                "interested_genres": genres,
            }
        )
    except DuplicateRecordError:
        raise ConflictError("Username, email or display name is already taken") from None

    logger.info("User signed up", extra={"user_id": created["id"], "username": created["username"]})
    return send_success(
        "User account created successfully",
        {"user": dump(UserOut, created)},
        status_code=status.HTTP_201_CREATED,
    )
