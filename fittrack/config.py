import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent  # -> project root

# Load .env explicitly from project root
load_dotenv(BASE_DIR / ".env")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    PROJECT_NAME = "FitTrack Backend"

    def __init__(self) -> None:
        self.ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()
        self.DEBUG = _env_bool("DEBUG", self.ENVIRONMENT == "development")
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'fittrack.db'}")

        self.JWT_SECRET = os.getenv("JWT_SECRET")
        self.ALGORITHM = os.getenv("ALGORITHM", "HS256")
        self.ACCESS_TOKEN_EXPIRE_DAYS = int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", 7))
        self.AUTH_COOKIE_NAME = os.getenv("AUTH_COOKIE_NAME", "auth-token")
        self.COOKIE_SECURE = self.ENVIRONMENT == "production"
        self.BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", 12))

        self.USDA_API_KEY = os.getenv("USDA_API_KEY")
        self.FRONTEND_DIR = os.getenv("FRONTEND_DIR")

        self.cors_origins = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "*").split(",")
            if origin.strip()
        ]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def cookie_max_age(self) -> int:
        return self.ACCESS_TOKEN_EXPIRE_DAYS * 24 * 60 * 60

    def validate(self) -> None:
        """Refuse to boot with settings that would weaken authentication."""
        if not self.JWT_SECRET:
            raise RuntimeError("JWT_SECRET must be set; refusing to sign sessions with a default secret")
        if self.ACCESS_TOKEN_EXPIRE_DAYS <= 0:
            raise RuntimeError("ACCESS_TOKEN_EXPIRE_DAYS must be positive")


settings = Settings()
