from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    REDIS_URL: str = "redis://localhost:6379/0"

    # Fixed key the focus stats snapshot lives under
    STATS_STORAGE_KEY: str = "pomodoro-stats"

    # Observability
    SENTRY_DSN: str = ""
    LOG_LEVEL: str = "INFO"

    ENVIRONMENT: str = "development"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
