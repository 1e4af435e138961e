from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+pysqlite:///./ncf_pos.db"
    log_level: str = "INFO"
    sqlite_busy_timeout: float = 30.0
    default_invoice_types: list[str] = ["B01", "B02", "B14", "B15"]

    model_config = SettingsConfigDict(env_file=".env", env_prefix="")


settings = Settings()
