import os

from pydantic import BaseModel, Field


class Settings(BaseModel):
    environment: str = "production"
    request_timeout_ms: int = Field(default=25000, gt=0)
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == "development"

    @property
    def request_timeout(self) -> float:
        return self.request_timeout_ms / 1000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            environment=os.getenv("APP_ENV", "production"),
            request_timeout_ms=int(os.getenv("REQUEST_TIMEOUT_MS", "25000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
        )
