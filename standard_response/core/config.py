from pydantic import Field
from pydantic_settings import BaseSettings

from standard_response.core.constants import DEFAULT_VALIDATION_ERROR_MESSAGE


class Settings(BaseSettings):
    """Application configuration loaded from environment variables / .env file."""

    app_name: str = Field(default="Standard Response API", alias="APP_NAME")
    app_env: str = Field(default="development", alias="APP_ENV")
    frontend_url: str = Field(default="http://localhost:3000", alias="FRONTEND_URL")

    # Routes without an explicit STANDARD/RAW declaration are wrapped only
    # when this is on.
    intercept_all: bool = Field(default=True, alias="STANDARD_RESPONSE_INTERCEPT_ALL")
    validation_error_message: str = Field(
        default=DEFAULT_VALIDATION_ERROR_MESSAGE,
        alias="STANDARD_RESPONSE_VALIDATION_ERROR_MESSAGE",
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "populate_by_name": True,
    }

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


settings = Settings()
