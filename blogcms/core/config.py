import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel


def _env_bool(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).lower() in ("1", "true", "yes")


class Settings(BaseModel):
    # MongoDB
    mongo_uri: str = "mongodb://localhost:27017"
    mongo_db_name: str = "blogcms"
    mongo_collection: str = "blogs"

    # Cloudinary
    cloudinary_cloud_name: Optional[str] = None
    cloudinary_api_key: Optional[str] = None
    cloudinary_api_secret: Optional[str] = None
    cloudinary_folder: str = "blogs"
    image_max_width: int = 800
    image_max_height: int = 600
    max_upload_bytes: int = 50 * 1024 * 1024  # 50 MB

    # DeepL
    deepl_api_key: Optional[str] = None
    deepl_api_url: str = "https://api-free.deepl.com"
    translate_timeout: float = 10.0

    require_english: bool = False
    cors_origins: List[str] = ["*"]
    log_level: str = "info"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment (and a .env file if present)."""
        load_dotenv()
        defaults = cls()
        origins = os.getenv("CORS_ORIGINS")
        return cls(
            mongo_uri=os.getenv("DATABASE_URL", defaults.mongo_uri),
            mongo_db_name=os.getenv("MONGO_DB_NAME", defaults.mongo_db_name),
            mongo_collection=os.getenv("MONGO_COLLECTION", defaults.mongo_collection),
            cloudinary_cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME"),
            cloudinary_api_key=os.getenv("CLOUDINARY_API_KEY"),
            cloudinary_api_secret=os.getenv("CLOUDINARY_API_SECRET"),
            cloudinary_folder=os.getenv("CLOUDINARY_FOLDER", defaults.cloudinary_folder),
            image_max_width=int(os.getenv("IMAGE_MAX_WIDTH", defaults.image_max_width)),
            image_max_height=int(os.getenv("IMAGE_MAX_HEIGHT", defaults.image_max_height)),
            max_upload_bytes=int(os.getenv("MAX_UPLOAD_BYTES", defaults.max_upload_bytes)),
            deepl_api_key=os.getenv("DEEPL_API_KEY"),
            deepl_api_url=os.getenv("DEEPL_API_URL", defaults.deepl_api_url),
            translate_timeout=float(os.getenv("TRANSLATE_TIMEOUT", defaults.translate_timeout)),
            require_english=_env_bool("BLOG_REQUIRE_ENGLISH"),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()] if origins else defaults.cors_origins,
            log_level=os.getenv("LOG_LEVEL", defaults.log_level),
        )
