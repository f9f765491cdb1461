# boibritto/settings.py
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# SQLite database file
DB_PATH = os.getenv("DB_PATH", "boibritto.db")

# Firebase Admin SDK
FIREBASE_CREDENTIALS_PATH = os.getenv("FIREBASE_CREDENTIALS_PATH")
FIREBASE_PROJECT_ID = os.getenv("FIREBASE_PROJECT_ID", "boibritto")
# Reject ID tokens revoked since issue (one user lookup per request)
FIREBASE_CHECK_REVOKED = os.getenv("FIREBASE_CHECK_REVOKED", "false").lower() == "true"
# Set by the Firebase auth emulator during local development
FIREBASE_AUTH_EMULATOR_HOST = os.getenv("FIREBASE_AUTH_EMULATOR_HOST")

# Frontend origin allowed by CORS (in addition to local dev servers)
FRONTEND_URL = os.getenv("FRONTEND_URL")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Page size for book, blog and collection listings
BOOKS_PAGE_SIZE = int(os.getenv("BOOKS_PAGE_SIZE", 20))
