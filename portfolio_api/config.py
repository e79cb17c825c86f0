import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent  # -> project root

# Load .env explicitly from project root
load_dotenv(BASE_DIR / ".env")


class Settings:
    PROJECT_NAME = "Portfolio API"

    APP_ENV = os.getenv("APP_ENV", "development").lower()
    PORT = int(os.getenv("PORT", 5000))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./portfolio.db")

    JWT_SECRET = os.getenv("JWT_SECRET", "change-this-secret")
    ALGORITHM = os.getenv("ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 1440))

    ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@example.com")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")
    SEED_SAMPLE_DATA = os.getenv("SEED_SAMPLE_DATA", "true").lower() == "true"

    UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", str(BASE_DIR / "uploads"))).resolve()
    UPLOAD_URL_PREFIX = "/uploads"
    MAX_UPLOAD_SIZE_MB = int(os.getenv("MAX_UPLOAD_SIZE_MB", 5))
    BACKEND_BASE_URL = os.getenv("BACKEND_BASE_URL")

    # Only honour X-Forwarded-For when running behind a known reverse proxy.
    TRUST_PROXY = os.getenv("TRUST_PROXY", "false").lower() == "true"

    RATE_LIMIT_WINDOW_MINUTES = int(os.getenv("RATE_LIMIT_WINDOW_MINUTES", 15))
    RATE_LIMIT_MAX = int(
        os.getenv("RATE_LIMIT_MAX", 100 if APP_ENV == "production" else 1000)
    )

    cors_origins = [
        origin.strip()
        for origin in os.getenv(
            "CORS_ORIGINS", os.getenv("FRONTEND_URL", "http://localhost:3000")
        ).split(",")
        if origin.strip()
    ]

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"

    @property
    def max_upload_bytes(self) -> int:
        return self.MAX_UPLOAD_SIZE_MB * 1024 * 1024


settings = Settings()
