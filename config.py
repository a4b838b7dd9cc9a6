"""
Application configuration.

Settings are grouped by concern and read from RASTER_* environment
variables once per process (see get_settings()).
"""

import os
from functools import lru_cache
from typing import Any, Dict, List

from pydantic import BaseModel, Field

from core.constants import ImageConstants, SystemConstants, TrimConstants


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: List[str]) -> List[str]:
    value = os.getenv(name)
    if not value:
        return default
    return [item.strip() for item in value.split(",") if item.strip()]


class SystemSettings(BaseModel):
    log_level: str = SystemConstants.LOG_LEVEL_DEFAULT
    debug: bool = False


class APISettings(BaseModel):
    host: str = SystemConstants.DEFAULT_HOST
    port: int = SystemConstants.DEFAULT_PORT
    cors_enabled: bool = True
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])


class ImageSettings(BaseModel):
    default_quality: int = Field(
        ImageConstants.DEFAULT_QUALITY, ge=ImageConstants.MIN_QUALITY, le=ImageConstants.MAX_QUALITY
    )
    trim_threshold: int = Field(
        TrimConstants.DEFAULT_THRESHOLD, ge=TrimConstants.MIN_THRESHOLD, le=TrimConstants.MAX_THRESHOLD
    )
    high_quality: bool = False
    output_format: str = ImageConstants.DEFAULT_OUTPUT_FORMAT

    @property
    def output_extension(self) -> str:
        """OpenCV extension for result images, e.g. '.png'"""
        return f".{self.output_format.lower()}"


class Settings(BaseModel):
    """Top-level application settings"""

    environment: str = "development"
    system: SystemSettings = Field(default_factory=SystemSettings)
    api: APISettings = Field(default_factory=APISettings)
    image: ImageSettings = Field(default_factory=ImageSettings)

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from RASTER_* environment variables.

        Unset variables keep their defaults.
        """
        return cls(
            environment=os.getenv("RASTER_ENV", "development"),
            system=SystemSettings(
                log_level=os.getenv("RASTER_LOG_LEVEL", SystemConstants.LOG_LEVEL_DEFAULT).upper(),
                debug=_env_bool("RASTER_DEBUG"),
            ),
            api=APISettings(
                host=os.getenv("RASTER_HOST", SystemConstants.DEFAULT_HOST),
                port=int(os.getenv("RASTER_PORT", str(SystemConstants.DEFAULT_PORT))),
                cors_origins=_env_list("RASTER_CORS_ORIGINS", ["*"]),
            ),
            image=ImageSettings(
                default_quality=int(os.getenv("RASTER_DEFAULT_QUALITY", str(ImageConstants.DEFAULT_QUALITY))),
                trim_threshold=int(os.getenv("RASTER_TRIM_THRESHOLD", str(TrimConstants.DEFAULT_THRESHOLD))),
                high_quality=_env_bool("RASTER_HIGH_QUALITY"),
                output_format=os.getenv("RASTER_OUTPUT_FORMAT", ImageConstants.DEFAULT_OUTPUT_FORMAT).upper(),
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict for app.state.config and the /api/system/config route"""
        return self.model_dump()


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings"""
    return Settings.from_env()
