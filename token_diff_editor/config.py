import logging
import os

from pydantic import BaseModel, field_validator

from token_diff_editor.tools.tokens import DEFAULT_ENCODING

ENV_ENCODING = "TOKEN_DIFF_ENCODING"
ENV_LOG_LEVEL = "TOKEN_DIFF_LOG_LEVEL"
ENV_LENIENT = "TOKEN_DIFF_LENIENT"


def _env_truthy(name: str) -> bool:
    return os.getenv(name, "").lower() in ("1", "true", "yes", "on")


def _env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip()


class ServerSettings(BaseModel):
    encoding: str = DEFAULT_ENCODING
    log_level: str = "INFO"
    strict_arguments: bool = True

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls, **overrides) -> "ServerSettings":
        """Build settings from the environment; non-None overrides win."""
        values = {
            "encoding": _env_str(ENV_ENCODING, DEFAULT_ENCODING),
            "log_level": _env_str(ENV_LOG_LEVEL, "INFO"),
            "strict_arguments": not _env_truthy(ENV_LENIENT),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
