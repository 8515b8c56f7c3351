from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "JSend API"
    app_env: str = "local"
    log_level: str = "INFO"

    response_format_header: str = "X-Response-Format"
    response_format: str = "jsend"
    # EncodeOption bitmask used when rendering responses.
    encode_options: int = 0


@lru_cache
def get_settings() -> Settings:
    return Settings()
