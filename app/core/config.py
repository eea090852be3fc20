from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    DATABASE_URL: str = "postgresql://smarty:smarty@db:5432/smarty"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://smartygym.com,https://api.smartygym.com"
    CORS_ORIGINS: str = "*"

    # Every "which day is it" decision is made in this zone (Cyprus, EET/EEST).
    CIVIL_TIMEZONE: str = "Europe/Nicosia"

    # Check-in windows, civil hours. Start inclusive, end exclusive.
    MORNING_WINDOW_START: int = 7
    MORNING_WINDOW_END: int = 9
    NIGHT_WINDOW_START: int = 19
    NIGHT_WINDOW_END: int = 21

    # Day 1 of the 28-day WOD periodization.
    WOD_CYCLE_START: str = "2024-12-24"

    STATS_LOOKBACK_DAYS: int = 90

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
