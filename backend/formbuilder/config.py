from typing import List, Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    STORAGE_BACKEND: Literal["mongo", "file", "memory"] = "file"
    MONGO_URI: str = "mongodb://localhost:27017"
    DB_NAME: str = "form_builder"
    DATA_DIR: str = "_data"
    SIMULATED_LATENCY_MS: int = 0  # the browser build waited 300ms per call
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"  # In production, replace with specific origins

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
