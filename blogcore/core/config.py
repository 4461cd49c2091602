from datetime import datetime
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings

from blogcore.core.env_manager import EnvManager


class Settings(BaseSettings):
    DATABASE_URI: str = EnvManager.get_env_variable(
        "DATABASE_URL", "sqlite:///blog.db"
    )

    PROJECT_NAME: str = EnvManager.get_env_variable("PROJECT_NAME", "blogcore")
    PROJECT_VERSION: str = EnvManager.get_env_variable("PROJECT_VERSION", "0.1.0")
    TIME_ZONE: str = EnvManager.get_env_variable("TIME_ZONE", "UTC")
    LOG_LEVEL: str = EnvManager.get_env_variable("LOG_LEVEL", "INFO")

    DEFAULT_LOCALE: str = EnvManager.get_env_variable("DEFAULT_LOCALE", "en")
    POSTS_PER_PAGE: int = int(EnvManager.get_env_variable("POSTS_PER_PAGE", "10"))
    VALIDATE_SOURCE_URL: bool = EnvManager.get_bool("VALIDATE_SOURCE_URL", False)
    SOURCE_URL_TIMEOUT: float = float(
        EnvManager.get_env_variable("SOURCE_URL_TIMEOUT", "5.0")
    )
    SHARE_THIS_KEY: str = EnvManager.get_env_variable(
        "SHARE_THIS_KEY", "xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx"
    )

    def get_now(self):
        """Get the current time in the configured time zone."""
        tz = ZoneInfo(self.TIME_ZONE)
        return datetime.now(tz)


settings = Settings()
