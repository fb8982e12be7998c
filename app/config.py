"""Configuration management using environment variables"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

STORAGE_BACKENDS = ("memory", "sql")


class Settings:
    """Application settings - YAGNI: Only what we need right now"""

    def __init__(self):
        # Environment
        self.environment = os.getenv("ENVIRONMENT", "development")

        # Server configuration
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = self._get_int("PORT", 8000)

        # CORS origins (comma-separated list), added to the local dev origins
        self.cors_origins = os.getenv("CORS_ORIGINS", "")

        # Storage: in-memory by default, SQL for a catalog that outlives the process
        self.storage_backend = os.getenv("STORAGE_BACKEND", "memory").strip().lower()
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Invalid STORAGE_BACKEND: {self.storage_backend}. "
                f"Must be one of {STORAGE_BACKENDS}"
            )
        self.database_url = os.getenv(
            "DATABASE_URL",
            "sqlite+aiosqlite:///:memory:"
        )

        # Reported by /api/stats as-is, never computed from content
        self.hours_learned = self._get_int("HOURS_LEARNED", 1240)
        if self.hours_learned < 0:
            raise ValueError(f"HOURS_LEARNED must be non-negative, got {self.hours_learned}")

        # Logging
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable or raise a readable error."""
        raw = os.getenv(key, "").strip()
        if not raw:
            return default
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"{key} must be an integer, got {raw!r}") from None


# Global settings instance
settings = Settings()
