from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings, read from SALES_* environment variables or a .env file.
    Leaving database_url unset keeps carts in memory only.
    """

    model_config = SettingsConfigDict(env_prefix="SALES_", env_file=".env", extra="ignore")

    app_title: str = "Sales API"
    currency: str = "USD"
    decimals: int = Field(default=2, ge=0)
    log_level: str = "INFO"
    database_url: str | None = None
