from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"

    # Infra
    redis_url: str = "redis://redis:6379/0"

    # Proof codes
    proof_cache_key: str = "EmailProof"
    proof_validity_seconds: int = 300
    proof_key_scope: Literal["shared", "per_email"] = "shared"
    proof_write_mode: Literal["last_writer_wins", "compare_and_swap"] = (
        "last_writer_wins"
    )
    proof_write_max_attempts: int = 5

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
