"""Application configuration settings.

Values can be overridden via environment variables (or a local ``.env``).
"""
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()

# __file__ = .../mediahub_backend/app/core/config.py
_BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    # Database
    database_url: Optional[str] = os.getenv("DATABASE_URL")
    db_host: Optional[str] = os.getenv("DB_HOST")
    db_port: int = int(os.getenv("DB_PORT", "3306"))
    db_user: Optional[str] = os.getenv("DB_USER")
    db_password: Optional[str] = os.getenv("DB_PASSWORD")
    db_name: Optional[str] = os.getenv("DB_NAME")
    db_pool_size: int = int(os.getenv("DB_POOL_SIZE", "5"))
    db_max_overflow: int = int(os.getenv("DB_MAX_OVERFLOW", "10"))

    # Content directory and public URLs
    upload_dir: str = os.getenv("UPLOAD_DIR", os.path.join(_BACKEND_DIR, "uploads"))
    public_base_url: Optional[str] = os.getenv("PUBLIC_BASE_URL")  # e.g. "https://cdn.example.com"

    # Server
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3001"))
    cors_origins: List[str] = [
        o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
    ]

    reconcile_on_startup: bool = _env_flag("RECONCILE_ON_STARTUP")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    def sqlalchemy_url(self) -> str:
        """
        Resolve the metadata store URL.

        DATABASE_URL wins; otherwise DB_HOST/DB_NAME select MySQL through
        PyMySQL; otherwise fall back to a SQLite file next to the package.
        """
        if self.database_url:
            return self.database_url
        if self.db_host and self.db_name:
            return "mysql+pymysql://{user}:{password}@{host}:{port}/{name}".format(
                user=self.db_user or "",
                password=self.db_password or "",
                host=self.db_host,
                port=self.db_port,
                name=self.db_name,
            )
        return f"sqlite:///{os.path.join(_BACKEND_DIR, 'mediahub.db')}"


settings = Settings()
