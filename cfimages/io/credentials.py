"""
Credential models and helpers used by the client constructor.
"""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from cfimages.io.env import CFIMAGES_ENV_FILENAME, default_env_path


class ClientConfig(BaseModel):
    """Immutable account configuration of one client instance."""

    account_id: str
    api_key: SecretStr

    model_config = ConfigDict(frozen=True)


class CloudflareCredentials(BaseSettings):
    """
    Settings model for Cloudflare Images credentials via environment variables
    or other settings sources supported by `pydantic-settings`.
    """

    ACCOUNT_ID: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("CLOUDFLARE_ACCOUNT_ID", "ACCOUNT_ID")
    )
    API_KEY: Optional[SecretStr] = Field(
        default=None, validation_alias=AliasChoices("CLOUDFLARE_API_KEY", "API_KEY")
    )

    model_config = SettingsConfigDict(
        env_file=(str(default_env_path()), CFIMAGES_ENV_FILENAME),
        extra="ignore",
    )

    def validate_credentials(self) -> None:
        """Validate that both account id and API key are present."""
        if self.ACCOUNT_ID is None or self.API_KEY is None:
            raise ValueError("CLOUDFLARE_ACCOUNT_ID and CLOUDFLARE_API_KEY must be set.")

    def to_config(self) -> ClientConfig:
        self.validate_credentials()
        return ClientConfig(account_id=self.ACCOUNT_ID, api_key=self.API_KEY)
