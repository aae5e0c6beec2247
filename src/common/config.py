"""
Configuration loader for the job application tracker.

Loads all settings from environment variables (.env file).
Validates required settings and provides type-safe access.
"""

import os
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def env_int(name: str, default: int, problems: List[str]) -> int:
    """
    Read an integer setting, falling back to default if it is not a number.

    The bad value is recorded in problems so Config.validate() can report it.
    """
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        problems.append(f"{name} must be an integer, got '{raw}'")
        return default


_setting_errors: List[str] = []


class Config:
    """
    Centralized configuration for the tracker API, board client and CLI.

    All values loaded from environment variables - NO SECRETS IN CODE.
    """

    # ===== MongoDB =====
    MONGODB_URI: str = os.getenv("MONGODB_URI", "")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "job_tracker")
    MONGODB_COLLECTION: str = os.getenv("MONGODB_COLLECTION", "jobs")
    # Fail fast (5s instead of PyMongo's 30s default)
    MONGODB_TIMEOUT_MS: int = env_int("MONGODB_TIMEOUT_MS", 5000, _setting_errors)

    # ===== HTTP API =====
    API_PREFIX: str = os.getenv("API_PREFIX", "/api")

    # ===== Board client =====
    TRACKER_API_URL: str = os.getenv("TRACKER_API_URL", "http://localhost:5000/api")
    REQUEST_TIMEOUT: int = env_int("REQUEST_TIMEOUT", 10, _setting_errors)  # seconds

    # ===== Logging =====
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "simple")  # "simple" or "json"

    # Non-numeric values found while loading
    SETTING_ERRORS: List[str] = _setting_errors

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required configuration is present.

        Raises:
            ValueError: If required configuration is missing
        """
        errors = list(cls.SETTING_ERRORS)

        if not cls.MONGODB_URI:
            errors.append("MONGODB_URI is required (set it in .env or the environment)")

        if cls.LOG_FORMAT not in ("simple", "json"):
            errors.append(f"LOG_FORMAT must be 'simple' or 'json', got '{cls.LOG_FORMAT}'")

        if cls.MONGODB_TIMEOUT_MS <= 0:
            errors.append("MONGODB_TIMEOUT_MS must be positive")

        if errors:
            raise ValueError(
                "Configuration errors:\n" + "\n".join(f"  - {e}" for e in errors)
            )

    @classmethod
    def summary(cls) -> str:
        """Return a summary of the current configuration (safe for logging)."""
        return f"""
Configuration Summary:
  MongoDB: {'✓ Configured' if cls.MONGODB_URI else '✗ Missing'}
  Database: {cls.MONGODB_DATABASE}.{cls.MONGODB_COLLECTION}
  API Prefix: {cls.API_PREFIX}
  Tracker API URL: {cls.TRACKER_API_URL}
  Log Level: {cls.LOG_LEVEL} ({cls.LOG_FORMAT})
        """.strip()
