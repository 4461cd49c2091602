import os
from typing import Optional


class EnvManager:
    """Read configuration values from the process environment."""

    TRUE_VALUES = {"1", "true", "yes", "on"}

    @staticmethod
    def get_env_variable(name: str, default: Optional[str] = None) -> str:
        value = os.getenv(name)
        if value is None or value == "":
            return default  # type: ignore
        return value

    @classmethod
    def get_bool(cls, name: str, default: bool = False) -> bool:
        value = os.getenv(name)
        if value is None or value == "":
            return default
        return value.strip().lower() in cls.TRUE_VALUES
