from enum import Enum
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SumsSource(str, Enum):
    """Which upstream page(s) the incoming/outgoing sums are taken from."""

    FIRST = "first"
    LAST = "last"
    SUM = "sum"


class Settings(BaseSettings):
    app_name: str = "YaYa Wallet Transaction Dashboard"
    environment: str = "development"
    allowed_origins: str = "*"
    port: int = 5000
    log_level: str = "INFO"

    @property
    def parsed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    # YaYa Wallet API settings
    yaya_api_key: str = ""
    yaya_api_secret: str = ""
    yaya_base_url: str = "https://sandbox.yayawallet.com"
    current_user_account_id: Optional[str] = None
    request_timeout: float = 30.0

    # Aggregation settings
    # Upper bound on upstream page fetches per listing request, so a
    # misreported lastPage can never turn into an endless loop.
    max_upstream_pages: int = Field(default=10, ge=1)
    sums_source: SumsSource = SumsSource.FIRST

    # Dashboard settings
    display_locale: str = "en_US"
    page_size: int = Field(default=10, ge=1)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def has_credentials(self) -> bool:
        return bool(self.yaya_api_key and self.yaya_api_secret)


def get_settings() -> Settings:
    return Settings()
