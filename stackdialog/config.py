"""Application configuration loaded from environment variables and .env file."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Values are loaded from environment variables first,
    then from a .env file in the project root as fallback.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    DATABASE_URL: str = "sqlite:///./dev.db"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # 대화 엔진 설정
    STORAGE_BACKEND: str = "sql"  # "sql" | "memory"
    DIALOG_STATE_PROPERTY: str = "DialogState"
    DEFAULT_LOCALE: str = "en-us"
    MAX_TOKEN_DISTANCE: int = 2


settings = Settings()
