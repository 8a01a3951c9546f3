from __future__ import annotations

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_version: str = "1.0.0"

    # Auth (tokens are issued by the external auth provider)
    jwt_secret_key: str = "jwt-super-secret-key-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_audience: str = ""           # e.g. "authenticated"; empty = not checked

    # Key-value store
    db_url: str = "sqlite:///./energy_data.db"
    store_timeout_seconds: float = 5.0

    # Billing / forecasting
    default_rate_per_kwh: float = 0.12
    forecast_min_entries: int = 7
    forecast_window: int = 30
    forecast_horizon_days: int = 7

    # Energy assistant (Gemini)
    gemini_api_key: str = ""
    gemini_model: str = "gemini-pro"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    llm_timeout_seconds: float = 20.0

    # CORS
    cors_origins: str = "http://localhost:3000,http://localhost:5173"

    # Logging
    log_level: str = "INFO"

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


def get_settings() -> Settings:
    """Return settings, reading env variables fresh (no module-level cache).

    Tests and the seed script override values through os.environ before
    calling in, so each call reads from the current environment state.
    """
    return Settings()
