from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

_PACKAGE_DIR = Path(__file__).resolve().parent

# Load .env from project root
load_dotenv(_PACKAGE_DIR.parent / ".env")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class AppConfig:
    session_secret: str = os.getenv("SESSION_SECRET", "gift-finder-secret-change-in-production")
    catalog_path: Path = Path(os.getenv("GIFT_CATALOG_PATH", str(_PACKAGE_DIR / "data" / "gifts.csv")))
    persist_catalog: bool = _env_flag("GIFT_CATALOG_PERSIST")
    upload_dir: Path = Path(os.getenv("GIFT_UPLOAD_DIR", str(_PACKAGE_DIR / "data" / "uploads")))
    max_image_bytes: int = int(os.getenv("GIFT_MAX_IMAGE_BYTES", str(5 * 1024 * 1024)))
    admin_username: str = os.getenv("ADMIN_USERNAME", "admin")
    admin_password: str = os.getenv("ADMIN_PASSWORD", "admin123")


DEFAULT_APP_CONFIG = AppConfig()
