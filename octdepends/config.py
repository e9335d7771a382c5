"""Environment-driven settings for octdepends.

Values are read from the process environment; ``octdepends/__init__.py``
loads a ``.env`` file first so local overrides work for every entry point.
"""

import os

from pydantic import BaseModel, Field, field_validator

DEFAULT_MAX_DEPTH = 256


class Settings(BaseModel):
    """Runtime settings."""

    log_level: str = Field(default="INFO", description="Level of the octdepends logger")
    max_depth: int = Field(
        default=DEFAULT_MAX_DEPTH,
        ge=1,
        description="Maximum number of nested function bodies walked at once",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Default exclusion prefixes used when none are given",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()


def _split_paths(raw: str) -> list[str]:
    return [p for p in raw.split(os.pathsep) if p]


def load_settings() -> Settings:
    """Build Settings from OCTDEPENDS_* environment variables.

    Returns:
        Settings instance.

    Raises:
        pydantic.ValidationError: If a variable holds an invalid value.
    """
    return Settings(
        log_level=os.getenv("OCTDEPENDS_LOG_LEVEL", "INFO"),
        max_depth=os.getenv("OCTDEPENDS_MAX_DEPTH", str(DEFAULT_MAX_DEPTH)),
        exclude=_split_paths(os.getenv("OCTDEPENDS_EXCLUDE", "")),
    )
