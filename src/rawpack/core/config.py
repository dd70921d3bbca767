# rawpack/src/rawpack/core/config.py

from typing import Optional, Tuple

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Thumbnail rendering
    thumbnail_width: int = Field(default=640, gt=0)
    thumbnail_height: int = Field(default=480, gt=0)
    thumbnail_quality: int = Field(default=85, ge=1, le=95)
    prefer_embedded_preview: bool = Field(default=False)

    # Packaging
    package_suffix: str = Field(default=".jpg")
    copy_buffer_size: int = Field(default=32 * 1024, gt=0)
    temp_dir: Optional[str] = Field(default=None)

    log_level: str = Field(default="INFO")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "RAWPACK_",
        "extra": "ignore"
    }

    @property
    def thumbnail_size(self) -> Tuple[int, int]:
        return (self.thumbnail_width, self.thumbnail_height)


# Instantiate settings
settings = Settings()
