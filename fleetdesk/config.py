from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="FLEETDESK_", extra="ignore")

    # Storage
    database_url: str = "sqlite:///fleetdesk.db"
    storage_key_prefix: str = "ship_maintenance_"
    storage_quota_bytes: int = 5 * 1024 * 1024
    seed_on_startup: bool = True

    # Dashboard
    upcoming_jobs_limit: int = 5


settings = Settings()
