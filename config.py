# config.py
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Settings:
    db_path: Path
    upload_dir: Path
    inbox_dir: Path
    local_store_path: Path
    public_base_url: str = ""
    max_upload_mb: float = 25.0
    cloud_api_url: str = "http://127.0.0.1:8000"
    http_timeout: float = 40.0
    log_level: str = "INFO"

    @property
    def max_upload_bytes(self) -> int:
        return int(self.max_upload_mb * 1024 * 1024)


def load_settings() -> Settings:
    """Build settings from the environment (after .env has been loaded)."""
    return Settings(
        db_path=Path(os.getenv("SITE_DB_PATH", "storage/app.db")),
        upload_dir=Path(os.getenv("SITE_UPLOAD_DIR", "storage/uploads")),
        inbox_dir=Path(os.getenv("SITE_INBOX_DIR", "storage/inbox")),
        local_store_path=Path(os.getenv("SITE_LOCAL_STORE_PATH", "storage/local_store.json")),
        public_base_url=os.getenv("SITE_PUBLIC_BASE_URL", "").rstrip("/"),
        max_upload_mb=float(os.getenv("SITE_MAX_UPLOAD_MB", "25") or 25),
        cloud_api_url=os.getenv("SITE_CLOUD_API_URL", "http://127.0.0.1:8000").rstrip("/"),
        http_timeout=float(os.getenv("SITE_HTTP_TIMEOUT", "40") or 40),
        log_level=os.getenv("SITE_LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
