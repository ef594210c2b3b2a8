# app/config/settings.py
# Runtime configuration for the AgentConnect API

import os
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings read from the environment"""

    DEFAULT_SECRET_KEY = "change-me"

    def __init__(
        self,
        database_url: Optional[str] = None,
        db_sslmode: Optional[str] = None,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        access_token_expire_minutes: Optional[int] = None,
        cors_origins: Optional[List[str]] = None,
        auto_create_tables: Optional[bool] = None,
        log_level: Optional[str] = None,
    ):
        self.database_url = database_url or os.getenv(
            "DATABASE_URL", "postgresql://localhost:5432/agentconnect"
        )
        self.db_sslmode = db_sslmode or os.getenv("DB_SSLMODE") or None
        self.secret_key = secret_key or os.getenv("SECRET_KEY", self.DEFAULT_SECRET_KEY)
        self.algorithm = algorithm or os.getenv("ALGORITHM", "HS256")
        self.access_token_expire_minutes = access_token_expire_minutes or int(
            os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 24 * 60)
        )
        if cors_origins is None:
            raw = os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
            cors_origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
        self.cors_origins = cors_origins
        if auto_create_tables is None:
            auto_create_tables = _as_bool(os.getenv("AUTO_CREATE_TABLES"))
        self.auto_create_tables = auto_create_tables
        self.log_level = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()

    @property
    def uses_default_secret(self) -> bool:
        return self.secret_key == self.DEFAULT_SECRET_KEY
