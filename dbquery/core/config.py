"""
Settings for dbquery, loaded from environment variables or a ``.env`` file.

MySQL connection parameters are only used by ``dbquery.core.connect``; the
template engine itself needs nothing but the compiled-template cache size.
"""

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    MYSQL_HOST: str = "localhost"
    MYSQL_PORT: int = 3306
    MYSQL_USER: str = "root"
    MYSQL_PASSWORD: str = ""
    MYSQL_DATABASE: str = "database"
    MYSQL_CHARSET: str = "utf8mb4"

    # Seconds to wait when opening a connection
    DB_CONNECT_TIMEOUT: int = Field(default=10, ge=1)

    # Compiled templates kept in the LRU cache (0 disables caching)
    TEMPLATE_CACHE_MAX_SIZE: int = Field(default=512, ge=0)

    @property
    def mysql_connect_kwargs(self) -> dict[str, Any]:
        return {
            "host": self.MYSQL_HOST,
            "port": self.MYSQL_PORT,
            "user": self.MYSQL_USER,
            "password": self.MYSQL_PASSWORD,
            "database": self.MYSQL_DATABASE,
            "charset": self.MYSQL_CHARSET,
            "connect_timeout": self.DB_CONNECT_TIMEOUT,
        }


settings = Settings()  # type: ignore
