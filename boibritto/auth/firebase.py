"""
Firebase Authentication for BoiBritto.

Initializes the Admin SDK once per process and verifies the ID tokens the
client obtains from Firebase sign-in. The claims BoiBritto relies on are
``uid`` (account identity) plus ``email``, ``name`` and ``picture``, which
sign-up copies into the User record.
"""

import os
from functools import lru_cache

import firebase_admin
from firebase_admin import auth, credentials

from boibritto.logger import logger
from boibritto.settings import (
    FIREBASE_AUTH_EMULATOR_HOST,
    FIREBASE_CHECK_REVOKED,
    FIREBASE_CREDENTIALS_PATH,
    FIREBASE_PROJECT_ID,
)


class FirebaseAuthError(Exception):
    """An ID token could not be accepted."""


def _credential_source() -> str:
    if FIREBASE_AUTH_EMULATOR_HOST:
        return "emulator"
    if FIREBASE_CREDENTIALS_PATH and os.path.exists(FIREBASE_CREDENTIALS_PATH):
        return "service_account"
    return "application_default"


class FirebaseAuth:
    """Verifies Firebase ID tokens for the BoiBritto project."""

    def __init__(self, check_revoked: bool = FIREBASE_CHECK_REVOKED):
        self.check_revoked = check_revoked
        self._initialize()

    def _initialize(self) -> None:
        try:
            firebase_admin.get_app()
            logger.info("Firebase already initialized")
            return
        except ValueError:
            pass

        source = _credential_source()
        try:
            if source == "service_account":
                cred = credentials.Certificate(FIREBASE_CREDENTIALS_PATH)
                firebase_admin.initialize_app(cred, {"projectId": FIREBASE_PROJECT_ID})
            else:
                # The emulator accepts unsigned tokens; ADC covers Cloud Run and gcloud logins
                firebase_admin.initialize_app(options={"projectId": FIREBASE_PROJECT_ID})
        except Exception as e:
            logger.exception("Failed to initialize Firebase", extra={"error": str(e), "source": source})
            raise FirebaseAuthError(f"Firebase initialization failed: {e}") from e

        logger.info(
            "Firebase initialized",
            extra={"project_id": FIREBASE_PROJECT_ID, "source": source, "check_revoked": self.check_revoked},
        )

    def verify_token(self, id_token: str) -> dict:
        """
        Verify an ID token and return its decoded claims.

        Raises:
            FirebaseAuthError: expired, revoked, malformed or disabled-account
                tokens, tokens without a uid, and certificate fetch failures.
        """
        try:
            decoded_token = auth.verify_id_token(id_token, check_revoked=self.check_revoked)
        except auth.ExpiredIdTokenError as e:
            raise FirebaseAuthError("Token has expired") from e
        except auth.RevokedIdTokenError as e:
            raise FirebaseAuthError("Token has been revoked") from e
        except auth.InvalidIdTokenError as e:
            raise FirebaseAuthError("Invalid token") from e
        except auth.UserDisabledError as e:
            raise FirebaseAuthError("User account is disabled") from e
        except auth.CertificateFetchError as e:
            logger.error("Could not fetch Firebase signing certificates", extra={"error": str(e)})
            raise FirebaseAuthError("Token verification unavailable") from e

        if not decoded_token.get("uid"):
            raise FirebaseAuthError("Token carries no uid")
        return decoded_token


@lru_cache
def get_firebase_auth() -> FirebaseAuth:
    """Process-wide FirebaseAuth; overridden in tests."""
    return FirebaseAuth()
