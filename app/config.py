from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # ── Intercom ────────────────────────────────────────────────────────
    # Client secret used to sign webhook notifications (X-Hub-Signature)
    intercom_secret: str = ""
    intercom_app_id: str = ""

    # ── Timer panel ─────────────────────────────────────────────────────
    # Number of past sessions shown under the live timer in the canvas
    history_display_limit: int = 5

    # ── General ─────────────────────────────────────────────────────────
    log_level: str = "INFO"
    cors_allow_origins: list[str] = ["*"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
