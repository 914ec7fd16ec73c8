"""
Runtime configuration loaded from environment variables.
"""
import os
from typing import Literal

from pydantic import BaseModel


class Settings(BaseModel):
    database_url: str = "sqlite:///./db/catalog.sqlite3"
    image_dir: str = "images"
    placeholder_image: str = "default.jpg"
    front_url: str = "http://localhost:3000"
    log_level: str = "INFO"
    log_dir: str = "logs"
    log_format: Literal["default", "json"] = "default"
    host: str = "0.0.0.0"
    port: int = 9000

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from the process environment.

        Unset variables fall back to the field defaults.
        """
        defaults = cls()
        return cls(
            database_url=os.getenv("DATABASE_URL", defaults.database_url),
            image_dir=os.getenv("IMAGE_DIR", defaults.image_dir),
            placeholder_image=os.getenv("PLACEHOLDER_IMAGE", defaults.placeholder_image),
            front_url=os.getenv("FRONT_URL", defaults.front_url),
            log_level=os.getenv("LOG_LEVEL", defaults.log_level),
            log_dir=os.getenv("LOG_DIR", defaults.log_dir),
            log_format=os.getenv("LOG_FORMAT", defaults.log_format),
            host=os.getenv("HOST", defaults.host),
            port=int(os.getenv("PORT", str(defaults.port))),
        )
