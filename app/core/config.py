"""Application configuration for the OTC recommendation service.

Configuration is loaded from environment variables (and an optional .env file),
making the service suitable for container-based deployments.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "otc_recommendations"
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"

    database_url: str | None = None

    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]

    # Recommendation sessions
    session_retention_days: int = 30
    session_id_strategy: str = "timestamp"  # timestamp | uuid
    history_limit: int = 20

    # Optional JSON file replacing the default symptom/condition tables
    recommendation_rules_path: str | None = None

    @property
    def sqlalchemy_database_uri(self) -> str:
        if self.database_url:
            return self.database_url

        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
