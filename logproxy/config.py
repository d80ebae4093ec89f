from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_ignore_empty=True)

    host: str = Field(default="localhost", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    log_level: str = Field(default="info", alias="LOG_LEVEL")
    upstream_timeout: float = Field(default=30.0, alias="UPSTREAM_TIMEOUT")

    @property
    def addr(self) -> str:
        return f"{self.host}:{self.port}"

    @property
    def upstream_timeout_or_none(self) -> float | None:
        # 0 (or less) means wait forever
        return self.upstream_timeout if self.upstream_timeout > 0 else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
