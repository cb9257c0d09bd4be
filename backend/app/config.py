"""
Task Board Backend — Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before app starts.

The MongoDB connection string is assembled from a credential pair
(DB_USER / DB_PASS) and the cluster host, unless MONGODB_URI supplies a
complete URI (local development, tests, self-hosted replica sets).
"""

from typing import List, Optional
from urllib.parse import quote_plus

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have sensible defaults for development.
    Production deployments MUST provide DB_USER and DB_PASS (or MONGODB_URI).
    """

    # ── Database ──────────────────────────────────────────────────────────
    # What: Atlas credential pair, embedded into the SRV connection string
    db_user: str = Field(default="", description="MongoDB user name")
    db_pass: str = Field(default="", description="MongoDB password")

    # What: Cluster host for the mongodb+srv:// scheme
    mongodb_host: str = Field(default="cluster0.oijxnxr.mongodb.net")

    # What: Full connection URI; takes precedence over the credential pair
    mongodb_uri: Optional[str] = Field(default=None)

    database_name: str = Field(default="freeDB")

    # What: Server selection timeout for the client (milliseconds)
    # Trade-off: Lower = faster failure on an unreachable cluster at startup
    mongodb_timeout_ms: int = Field(default=5000, ge=500, le=60000)

    # ── Tasks ─────────────────────────────────────────────────────────────
    # What: Hard cap on GET /tasks results (no pagination cursor exists)
    task_list_limit: int = Field(default=100, ge=1, le=1000)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DB_USER and db_user both work
    }

    @property
    def mongodb_url(self) -> str:
        """
        What:  Connection string handed to AsyncMongoClient.
        How:   MONGODB_URI verbatim if set, otherwise an Atlas SRV URI with
               the credentials percent-escaped (passwords may contain '@' or ':').
        """
        if self.mongodb_uri:
            return self.mongodb_uri
        return (
            f"mongodb+srv://{quote_plus(self.db_user)}:{quote_plus(self.db_pass)}"
            f"@{self.mongodb_host}/?retryWrites=true&w=majority&appName=Cluster0"
        )

    def validate_required_for_production(self) -> None:
        """
        What:  Validates that critical settings are configured.
        When:  Called during app startup (lifespan).
        How:   Checks each required field and raises ValueError with guidance.
        """
        errors = []
        if not self.mongodb_uri:
            if not self.db_user:
                errors.append("DB_USER is not set (or provide MONGODB_URI)")
            if not self.db_pass:
                errors.append("DB_PASS is not set (or provide MONGODB_URI)")
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance, imported throughout the application
settings = Settings()
