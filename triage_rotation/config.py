"""Application configuration via Pydantic Settings.

NOTE: env variable names are mapped explicitly (LINEAR_API_KEY, LINEAR_TEAM_ID,
ASSIGNEE_EMAILS, ...) to avoid silent misconfiguration. Settings are frozen and
loaded once by the CLI, then passed to each component.
"""

from __future__ import annotations

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from triage_rotation.domain.errors import ConfigurationError

REQUIRED_VARS = ("LINEAR_API_KEY", "LINEAR_TEAM_ID", "ASSIGNEE_EMAILS")


class Settings(BaseSettings):
    # Linear
    linear_api_key: str = Field(default="", validation_alias="LINEAR_API_KEY")
    linear_team_id: str = Field(default="", validation_alias="LINEAR_TEAM_ID")
    linear_api_url: str = Field(
        default="https://api.linear.app/graphql",
        validation_alias="LINEAR_API_URL",
    )
    request_timeout: float = Field(default=10.0, validation_alias="LINEAR_TIMEOUT")
    page_size: int = Field(default=100, gt=0, validation_alias="LINEAR_PAGE_SIZE")

    # Rotation
    assignee_emails: str = Field(default="", validation_alias="ASSIGNEE_EMAILS")
    workspace_slug: str | None = Field(default=None, validation_alias="WORKSPACE_SLUG")
    subscribe_assignee: bool = Field(default=True, validation_alias="SUBSCRIBE_ASSIGNEE")

    # App
    debug: bool = Field(default=False, validation_alias="DEBUG")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
        "frozen": True,
    }

    @property
    def rotation_contact_keys(self) -> list[str]:
        """Comma-separated ASSIGNEE_EMAILS, trimmed, blanks dropped, order kept."""
        return [part.strip() for part in self.assignee_emails.split(",") if part.strip()]

    def missing_required(self) -> list[str]:
        values = {
            "LINEAR_API_KEY": self.linear_api_key,
            "LINEAR_TEAM_ID": self.linear_team_id,
            "ASSIGNEE_EMAILS": self.assignee_emails,
        }
        return [name for name in REQUIRED_VARS if not values[name].strip()]


def load_settings(env_file: str | None = ".env") -> Settings:
    """Read settings from the environment and check required values.

    Raises:
        ConfigurationError: if a required variable is missing or blank, if the
            rotation list is empty after parsing, or if a value has the wrong type.
    """
    try:
        settings = Settings(_env_file=env_file)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e

    missing = settings.missing_required()
    if missing:
        raise ConfigurationError(f"Missing required env vars: {', '.join(missing)}")
    if not settings.rotation_contact_keys:
        raise ConfigurationError("ASSIGNEE_EMAILS is empty after parsing.")
    return settings
