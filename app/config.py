"""Environment configuration for the Task Board API."""
import os
from dotenv import load_dotenv

# Load environment variables from a local .env when present
load_dotenv()

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./taskboard.db")
SQL_ECHO = os.environ.get("SQL_ECHO", "false").lower() == "true"

# Shared secret of the auth provider that signs session JWTs
BETTER_AUTH_SECRET = os.environ.get("BETTER_AUTH_SECRET", "change-me-in-production")
JWT_ALGORITHM = "HS256"

ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:5173")

# Color assigned to tags created implicitly from a task's tag names
DEFAULT_TAG_COLOR = os.environ.get("DEFAULT_TAG_COLOR", "blue")

# Trailing windows offered by the activity chart, in days
ACTIVITY_WINDOWS = (7, 30, 90)
ACTIVITY_WINDOW_DAYS = int(os.environ.get("ACTIVITY_WINDOW_DAYS", "90"))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
