from __future__ import annotations

from functools import lru_cache
import json
from typing import Annotated

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from sample_types.errors import ConfigError


class AppConfig(BaseSettings):
    # Real env vars win over .env; prefer the app's own .env, then workspace-root/.env.
    model_config = SettingsConfigDict(env_file=(".env", "../.env"), extra="ignore", frozen=True)

    port: int = Field(default=3000, ge=0, le=65535, validation_alias=AliasChoices("PORT", "port"))

    host: str = Field(default="0.0.0.0", validation_alias=AliasChoices("HOST", "host"))

    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("NODE_ENV", "ENVIRONMENT", "ENV", "environment"),
    )

    # Kept as given (usually lower case); sample_logger resolves it.
    log_level: str = Field(default="info", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))

    # Accepts either JSON array or comma-separated string.
    cors_allow_origins: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        validation_alias=AliasChoices("CORS_ALLOW_ORIGINS", "cors_allow_origins"),
    )
    cors_allow_methods: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["GET", "OPTIONS"],
        validation_alias=AliasChoices("CORS_ALLOW_METHODS", "cors_allow_methods"),
    )
    cors_allow_headers: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: ["*"],
        validation_alias=AliasChoices("CORS_ALLOW_HEADERS", "cors_allow_headers"),
    )

    @field_validator("cors_allow_origins", "cors_allow_methods", "cors_allow_headers", mode="before")
    @classmethod
    def _split_csv_or_passthrough(cls, v):
        if v is None:
            return []
        if isinstance(v, (list, tuple, set)):
            return [str(x).strip() for x in v if str(x).strip()]
        if isinstance(v, str):
            raw = v.strip()
            if not raw:
                return []
            if raw.startswith("[") and raw.endswith("]"):
                try:
                    parsed = json.loads(raw)
                except json.JSONDecodeError:
                    raise ValueError("Invalid JSON array for setting; expected e.g. [\"https://example.com\"]")
                if isinstance(parsed, list):
                    return [str(x).strip() for x in parsed if str(x).strip()]
                return []
            return [x.strip() for x in raw.split(",") if x.strip()]
        return v

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


def load_config() -> AppConfig:
    """Read configuration from the environment (and `.env`) right now.

    Raises:
        ConfigError: when a value cannot be parsed, e.g. a non-numeric PORT.
    """

    try:
        return AppConfig()
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
        raise ConfigError(
            f"Invalid configuration: {', '.join(fields) or 'unknown field'}",
            details={"errors": exc.errors(include_url=False, include_context=False)},
        ) from exc


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    return load_config()
