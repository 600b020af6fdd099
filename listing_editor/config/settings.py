# listing_editor/config/settings.py

"""Central configuration for the listing editor."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the listing editor."""

    # --- Remote store ---
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "").rstrip("/")
    SUPABASE_KEY: str = os.getenv("SUPABASE_KEY", "")
    PRODUCTS_TABLE: str = "products"
    PRODUCT_IMAGES_TABLE: str = "product_images"
    STORAGE_BUCKET: str = "avatars"
    UPLOAD_FOLDER: str = "products"     # Logical prefix for uploaded blobs

    # --- Transport ---
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"

    # --- Editor ---
    CAROUSEL_PAGE_SIZE: int = 4
    CATEGORIES: list[str] = [
        "경제경영",
        "만화",
        "사회과학",
        "소설/시/희곡",
        "어린이",
        "에세이",
        "유아",
        "인문학",
        "기타",
    ]
    ALLOWED_IMAGE_TYPES: list[str] = [
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
    ]
    # Refuse to submit over a record that never loaded
    BLOCK_SUBMIT_ON_LOAD_FAILURE: bool = (
        os.getenv("BLOCK_SUBMIT_ON_LOAD_FAILURE", "").lower()
        in ("1", "true", "yes")
    )

    # --- Logging ---
    CONSOLE_LOG_LEVEL: str = os.getenv("LISTING_EDITOR_LOG_LEVEL", "WARNING")

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
