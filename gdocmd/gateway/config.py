import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from gdocmd.gateway.markdown.models import DEFAULT_CHARS_PER_PAGE


class Settings(BaseSettings):
    chars_per_page: int = DEFAULT_CHARS_PER_PAGE  # page estimate budget when the request sets none

    log_dir: str = "logs"  # empty logs to stdout only
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=[os.getenv("ENV_FILE", ""), ".env"],
        extra="ignore",
        env_nested_delimiter="__",
    )


def get_settings() -> Settings:  # ty: ignore[invalid-return-type]
    """This is only used for dependency references, see __init__.py:

    app.dependency_overrides[get_settings] = lambda: settings
    """
    ...
