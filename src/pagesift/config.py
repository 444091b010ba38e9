"""
Configuration management for Pagesift.
"""
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration."""

    # Extraction settings
    # Upper bound for the single image-container readiness wait
    IMAGE_WAIT_TIMEOUT_MS: int = int(os.getenv("IMAGE_WAIT_TIMEOUT_MS", "15000"))
    SECTION_SIBLING_SCAN_LIMIT: int = int(os.getenv("SECTION_SIBLING_SCAN_LIMIT", "4"))

    # Flask settings
    FLASK_ENV: str = os.getenv("FLASK_ENV", "development")
    FLASK_DEBUG: bool = os.getenv("FLASK_DEBUG", "True").lower() == "true"
    FLASK_HOST: str = os.getenv("FLASK_HOST", "0.0.0.0")
    FLASK_PORT: int = int(os.getenv("FLASK_PORT", "5000"))
    SECRET_KEY: Optional[str] = os.getenv("SECRET_KEY")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def get_cors_origins(cls) -> list[str]:
        """Parse the comma-separated CORS origin list."""
        origins = [o.strip() for o in cls.CORS_ORIGINS.split(",") if o.strip()]
        return origins or ["*"]

    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if cls.IMAGE_WAIT_TIMEOUT_MS <= 0:
            errors.append(f"IMAGE_WAIT_TIMEOUT_MS must be positive, got {cls.IMAGE_WAIT_TIMEOUT_MS}")

        if cls.SECTION_SIBLING_SCAN_LIMIT < 1:
            errors.append(
                f"SECTION_SIBLING_SCAN_LIMIT must be at least 1, got {cls.SECTION_SIBLING_SCAN_LIMIT}"
            )

        if cls.FLASK_ENV == "production" and not cls.SECRET_KEY:
            errors.append("SECRET_KEY not set (required in production)")

        return errors

    @classmethod
    def is_valid(cls) -> bool:
        """Check if configuration is valid."""
        return len(cls.validate()) == 0

    @classmethod
    def get_summary(cls) -> dict:
        """Get configuration summary (safe for logging)."""
        return {
            "flask_env": cls.FLASK_ENV,
            "flask_debug": cls.FLASK_DEBUG,
            "image_wait_timeout_ms": cls.IMAGE_WAIT_TIMEOUT_MS,
            "section_sibling_scan_limit": cls.SECTION_SIBLING_SCAN_LIMIT,
            "cors_origins": cls.get_cors_origins(),
            "secret_key_configured": cls.SECRET_KEY is not None,
            "log_level": cls.LOG_LEVEL,
        }
