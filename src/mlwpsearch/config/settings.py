"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified)
  2. Environment variables (MLWPSEARCH_ prefix)
  3. Default values
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings


class ServerSettings(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Server bind address")
    port: int = Field(default=8080, description="Server port")
    cors_origins: list[str] = Field(default=["*"], description="Allowed CORS origins")


class MarkLogicSettings(BaseModel):
    """MarkLogic REST instance and query-building options.

    ``username`` and ``password`` must both be set for a driver to be
    created at all. ``search_exclude`` holds one exclusion rule per line,
    e.g.::

        status = draft
        embargo > {{today}}
    """

    host: str = Field(default="localhost", description="MarkLogic REST host")
    port: int = Field(default=8000, description="MarkLogic REST app server port")
    scheme: str = Field(default="http", description="http or https")
    username: str = Field(default="", description="REST user")
    password: str = Field(default="", description="REST user password")
    auth: str = Field(default="digest", description="Authentication scheme: digest or basic")
    timeout: float = Field(default=30.0, gt=0, description="HTTP request timeout in seconds")
    rest_config_option: str = Field(default="", description="Named query options passed as 'options'")
    rest_transform: str = Field(default="", description="Server-side transform passed as 'transform'")
    search_exclude: str = Field(default="", description="Newline-delimited exclusion rules")

    @field_validator("auth")
    @classmethod
    def _check_auth(cls, v: str) -> str:
        v = v.lower()
        if v not in ("digest", "basic"):
            raise ValueError(f"Unsupported auth scheme: {v!r}")
        return v

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"


class SiteSettings(BaseModel):
    """Where the search page lives, used as the base of paging links."""

    home_url: str = Field(default="/", description="Site home URL")
    search_page_url: str | None = Field(default=None, description="Dedicated search page URL")
    replace_search: bool = Field(
        default=False,
        description="Serve results from the home URL instead of a dedicated page",
    )
    query_param: str = Field(default="s", description="Query string key carrying the search text")


class SearchSettings(BaseModel):
    """Search behavior configuration."""

    driver: str = Field(default="marklogic", description="Name of the driver used for searches")
    default_page_length: int = Field(default=10, ge=1, description="Page length when the request has none")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="error", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the MLWPSEARCH_ prefix.
    Nested settings use double underscores: MLWPSEARCH_MARKLOGIC__PORT=8010

    Example:
        MLWPSEARCH_MARKLOGIC__USERNAME=admin
        MLWPSEARCH_MARKLOGIC__SEARCH_EXCLUDE="status = draft"
        MLWPSEARCH_SITE__SEARCH_PAGE_URL=https://example.com/search/
    """

    model_config = {
        "env_prefix": "MLWPSEARCH_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    app_name: str = Field(default="mlwpsearch", description="Application name")
    debug: bool = Field(default=False, description="Debug mode (forces debug logging)")

    server: ServerSettings = Field(default_factory=ServerSettings)
    marklogic: MarkLogicSettings = Field(default_factory=MarkLogicSettings)
    site: SiteSettings = Field(default_factory=SiteSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    def get_options(self) -> dict[str, Any]:
        """Return the flat option mapping consumed by the query layer.

        Read on every query so that edits to ``search_exclude`` and friends
        take effect without a restart.
        """
        ml = self.marklogic
        return {
            "username": ml.username,
            "password": ml.password,
            "rest_config_option": ml.rest_config_option,
            "rest_transform": ml.rest_transform,
            "search_exclude": ml.search_exclude,
        }

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are passed as init arguments, so they win
        over environment variables for the keys they set.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
