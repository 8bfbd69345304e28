from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    # Application
    APP_NAME: str = Field(default="flatfile")
    APP_VERSION: str = Field(default="0.1.0")

    # Environment
    ENV: str = Field(default="development")

    # Logging
    LOG_LEVEL: Optional[str] = Field(
        default=None,
        description="Minimum log level; inferred from ENV when unset",
    )
    LOG_TO_FILE: bool = Field(default=False, description="Also write logs to LOG_DIR")
    LOG_DIR: str = Field(default="logs")

    # Codec
    FLATFILE_ENCODING: str = Field(
        default="utf-8",
        description="Encoding used to decode/encode raw lines (e.g. 'latin-1', 'cp037')",
    )
    FLATFILE_LINE_ENDING: str = Field(
        default="\n",
        description="Separator written between lines",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    def get_log_dir(self) -> Path:
        """Get log directory as a Path."""
        return Path(self.LOG_DIR)


settings = Settings()
