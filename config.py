"""Configuration and environment settings"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Converter configuration"""

    # Defaults for options the caller leaves unset
    DEFAULT_THEME: str = "default"
    DEFAULT_PAGE_SIZE: str = "A4"  # A4, letter, legal
    DEFAULT_ORIENTATION: str = "portrait"
    DEFAULT_MARGIN_INCHES: float = 1.0

    # Fonts
    CODE_FONT: str = "Courier New"

    # Logging
    LOG_LEVEL: str = "INFO"

    # Workbook layout
    MAX_PREVIEW_CHARS: int = 50
    MIN_COLUMN_WIDTH: int = 10
    MAX_COLUMN_WIDTH: int = 50

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
