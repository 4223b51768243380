from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="STREAMCORE_", env_file=".env")

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    shutdown_grace_s: float = 5.0

    # SSE
    sse_initial_comment: str = "Connected to SSE stream"

    # Demo producers
    demo_item_count: int = 10
    demo_initial_delay_s: float = 0.5
    demo_interval_s: float = 1.0

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
