"""
Configuration system using Pydantic for type-safe settings management.

Settings come either from the process environment (the usual case for a
scheduled job) or from a YAML file with ``${VAR}`` interpolation. Both
paths fail with ConfigurationError before any store access.
"""

from __future__ import annotations

import os
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, HttpUrl, SecretStr, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from board_triage.exceptions import ConfigurationError

STORE_URL_ENV = ("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL")
SERVICE_KEY_ENV = ("SUPABASE_SERVICE_ROLE_KEY",)
OWNER_ID_ENV = ("BOARD_OWNER_ID",)


class StoreConfig(BaseModel):
    """Record store endpoint and credential.

    The credential is the store's service key; it bypasses row-level
    security, so every query the job issues is scoped by owner explicitly.
    """

    url: HttpUrl = Field(..., description="Base URL of the hosted store")
    service_key: SecretStr = Field(..., description="Service credential for the store's REST interface")
    timeout: float = Field(default=30.0, gt=0.0, description="Per-request timeout in seconds")


class TriageConfig(BaseModel):
    """Triage run tuning."""

    batch_size: int = Field(default=20, ge=1, le=1000, description="Maximum inbox items per run")
    default_agent: str = Field(
        default="dispatcher",
        description="Roster name of the agent that authors comments and receives unmatched steps",
    )
    summary_max_chars: int = Field(
        default=240, ge=1, description="Description characters quoted in the triage comment"
    )


class TriageSettings(BaseSettings):
    """Main settings for one triage run.

    Tuning values can be overridden from the environment with the
    ``BOARD_TRIAGE_`` prefix and ``__`` as the nested delimiter, e.g.
    ``BOARD_TRIAGE_TRIAGE__BATCH_SIZE=5``.
    """

    model_config = SettingsConfigDict(
        env_prefix="BOARD_TRIAGE_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    store: StoreConfig
    owner_id: str = Field(..., min_length=1, description="Owner scoping every store query")
    triage: TriageConfig = Field(default_factory=TriageConfig)

    @classmethod
    def from_env(cls) -> TriageSettings:
        """Load settings from the conventional environment variables.

        Returns:
            TriageSettings instance

        Raises:
            ConfigurationError: If a required variable is missing or invalid
        """
        store_url = _require_env(*STORE_URL_ENV)
        service_key = _require_env(*SERVICE_KEY_ENV)
        owner_id = _require_env(*OWNER_ID_ENV)

        try:
            return cls(
                store=StoreConfig(url=store_url, service_key=service_key),
                owner_id=owner_id,
            )
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    @classmethod
    def from_yaml(cls, config_path: str) -> TriageSettings:
        """Load settings from YAML file with environment variable interpolation.

        Supports ${VAR_NAME} syntax for environment variable substitution.

        Args:
            config_path: Path to YAML configuration file

        Returns:
            TriageSettings instance

        Raises:
            ConfigurationError: If config file is invalid or missing required fields
        """
        config_file = Path(config_path)
        if not config_file.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        try:
            yaml_content = config_file.read_text()
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file: {config_path}") from e

        try:
            yaml_content = cls._interpolate_env_vars(yaml_content)
        except ValueError as e:
            raise ConfigurationError(f"Invalid environment variable reference in config: {e}") from e

        try:
            config_dict = yaml.safe_load(yaml_content)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}") from e
        if not isinstance(config_dict, dict):
            raise ConfigurationError("Configuration must be a YAML object, not a list or scalar")

        try:
            return cls(**config_dict)
        except (TypeError, ValidationError) as e:
            raise ConfigurationError(f"Missing or invalid configuration fields: {e}") from e

    @staticmethod
    def _interpolate_env_vars(content: str) -> str:
        """Interpolate ${VAR_NAME} placeholders with environment variables.

        Supports ``${VAR_NAME}`` (required) and ``${VAR_NAME:-default}``.
        YAML comment lines are left unchanged.

        Raises:
            ValueError: If a required environment variable is not set
        """
        pattern = re.compile(r"\$\{([A-Z_][A-Z0-9_]*)(?::-([^}]*))?\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)
            value = os.getenv(var_name)

            if value is not None:
                return value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Environment variable {var_name} is not set")

        def process_line(line: str) -> str:
            if line.lstrip().startswith("#"):
                return line
            return pattern.sub(replace_var, line)

        return "\n".join(process_line(line) for line in content.split("\n"))


def _require_env(*names: str) -> str:
    """Return the first non-empty environment variable among ``names``.

    Raises:
        ConfigurationError: If none of them is set
    """
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    raise ConfigurationError(f"Missing environment variable: {' | '.join(names)}")
