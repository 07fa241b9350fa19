from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    telegram_bot_token: str

    # Shop backend
    api_url: str = "https://larek-api.nomoreparties.co/api/weblarek"
    cdn_url: str = "https://larek-api.nomoreparties.co/content/weblarek"
    request_timeout: float = 30.0

    # Seconds before the "removed from basket" notice returns to the catalog
    success_close_delay: float = 1.0

    currency_label: str = "синапсов"

    def api_base(self) -> str:
        return self.api_url.rstrip("/")

    def cdn_base(self) -> str:
        return self.cdn_url.rstrip("/")
