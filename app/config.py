"""Application settings loaded from the environment or a ``.env`` file."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    # ButterCMS
    butter_api_token: str = Field(default="", description="ButterCMS read API token")
    butter_api_base: str = Field(
        default="https://api.buttercms.com/v2", description="ButterCMS REST API base URL"
    )
    api_timeout: float = Field(default=10.0, gt=0, description="Upstream timeout in seconds")

    # Rendering
    page_size: int = Field(default=10, ge=1, le=100, description="Posts per list page")
    product_page_type: str = Field(default="product", description="Page type slug for products")
    site_name: str = Field(default="Butter Pages", description="Title used on list pages")
    template_dir: Path = Field(default=_DEFAULT_TEMPLATE_DIR)

    # Server
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=1, le=65535)
    environment: Literal["development", "production"] = "development"
    log_level: str = "INFO"

    @property
    def debug(self) -> bool:
        return self.environment == "development"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
