"""Configuration management for InviteCraft.

This module provides centralized configuration management using Pydantic
Settings.  All configuration is loaded from environment variables with the
INVITECRAFT_ prefix, allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (INVITECRAFT_* prefix)
2. .env file in the project root
3. Default values defined in InviteCraftConfig

Example .env file:
    INVITECRAFT_OPENAI_API_KEY=sk-...
    INVITECRAFT_OPENAI_PROXY_BASE=http://localhost:8000/api/openai-proxy?path=
    INVITECRAFT_IMAGE_MODEL=gpt-image-1
    INVITECRAFT_SERVER_PORT=8000

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.

Usage Example
-------------
    from invitecraft.core.config import config

    print(config.text_model)
    print(config.data_dir)

Directory Management
--------------------
The configuration creates ``data_dir`` on initialization.  It holds the
saved preferences file.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class InviteCraftConfig(BaseSettings):
    """Main configuration for InviteCraft.

    Attributes
    ----------
    OpenAI Settings:
        openai_api_key : str | None
            Server-side API key.  Used by the proxy when the caller sends no
            Authorization header, and by the generation routes when no key
            has been saved as a preference.
        openai_proxy_base : str
            Prefix prepended to OpenAI paths instead of the public endpoint
            (e.g. ``http://host/api/openai-proxy?path=``).  Empty to call
            OpenAI directly.
        openai_base_url : str
            Public OpenAI endpoint.
        text_model : str
            Model used for invitation wording.
        image_model : str
            Model used for background artwork.
        image_size : str
            Requested artwork size.
        text_temperature : float
            Sampling temperature for wording (0-2).
        request_timeout : float
            HTTP timeout in seconds for collaborator calls.

    Paths:
        data_dir : Path
            Directory for saved preferences.

    Server Settings:
        server_host : str
            Bind address for uvicorn.
        server_port : int
            Port for uvicorn (1024-65535).
        log_level : str
            Root logging level.

    Examples
    --------
        >>> custom_config = InviteCraftConfig(
        ...     text_model="gpt-4o",
        ...     data_dir="/tmp/invitecraft",
        ... )
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="INVITECRAFT_",
        case_sensitive=False,
    )

    # OpenAI collaborator settings
    openai_api_key: str | None = Field(
        default=None,
        description="Server-side OpenAI API key",
    )
    openai_proxy_base: str = Field(
        default="",
        description="Proxy prefix prepended to OpenAI paths (empty to call OpenAI directly)",
    )
    openai_base_url: str = Field(
        default="https://api.openai.com",
        description="Public OpenAI endpoint",
    )
    text_model: str = Field(
        default="gpt-4o-mini",
        description="Model used to write invitation wording",
    )
    image_model: str = Field(
        default="gpt-image-1",
        description="Model used to generate background artwork",
    )
    image_size: Literal["1024x1024", "1024x1536", "1536x1024"] = Field(
        default="1024x1024",
        description="Requested artwork size",
    )
    text_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    request_timeout: float = Field(
        default=60.0,
        description="HTTP timeout in seconds for collaborator calls",
        gt=0,
    )

    # Paths
    data_dir: Path = Field(
        default=Path("data"),
        description="Directory for saved preferences",
    )

    # Server settings
    server_host: str = Field(
        default="0.0.0.0",
        description="Server bind address",
    )
    server_port: int = Field(
        default=8000,
        description="Server port",
        ge=1024,
        le=65535,
    )
    log_level: str = Field(
        default="INFO",
        description="Root logging level (DEBUG, INFO, WARNING, ERROR)",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the data directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    @property
    def preferences_file(self) -> Path:
        """Path of the JSON file backing the saved API key."""
        return self.data_dir / "preferences.json"


# Global configuration instance
# Loads values from environment variables (INVITECRAFT_* prefix) and .env file.
config = InviteCraftConfig()
