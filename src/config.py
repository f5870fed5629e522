from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    SELF_NAME: str = "You"
    TIME_FORMAT: str = "%H:%M"
    LOG_LEVEL: str = "INFO"

    # Admin login is a configured lookup, other roles cannot sign in yet
    ADMIN_LOGINS: List[str] = []
    ADMIN_PASSWORD: str = ""

    MAX_ATTACHMENT_BYTES: int = 10 * 1024 * 1024

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


def get_settings():
    return Settings()  # type: ignore
