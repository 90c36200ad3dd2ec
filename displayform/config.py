import os
import re
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env early so env vars are available for YAML interpolation
load_dotenv(Path.cwd() / ".env")

CONFIG_FILE_NAME = "displayform.yaml"

# Pattern to match $VAR_NAME environment variable references
ENV_VAR_PATTERN = re.compile(r"\$([A-Z_][A-Z0-9_]*)")


def interpolate_env_vars(value):
    """Recursively replace $VAR_NAME with os.environ values."""
    if isinstance(value, str):

        def replace(match):
            var = match.group(1)
            val = os.environ.get(var)
            if val is None:
                raise ValueError(f"Environment variable ${var} not set")
            return val

        return ENV_VAR_PATTERN.sub(replace, value)
    elif isinstance(value, dict):
        return {k: interpolate_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [interpolate_env_vars(item) for item in value]
    return value


def get_config_path() -> Path:
    return Path.cwd() / CONFIG_FILE_NAME


def load_app_config(config_path: Path | None = None) -> dict:
    """Load and parse displayform.yaml with environment variable interpolation."""
    config_path = config_path or get_config_path()

    if not config_path.exists():
        raise FileNotFoundError(f"{CONFIG_FILE_NAME} not found at {config_path}")

    with open(config_path, "r") as f:
        config = yaml.safe_load(f) or {}

    return interpolate_env_vars(config)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DISPLAYFORM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Localization
    locale: str = "en"
    messages_dir: Path = Path("messages")

    # Placeholders for typed inputs
    url_placeholder: str = "http://domain.com"
    email_placeholder: str = "email@domain.com"
    password_placeholder: str = "password"

    # Shown in view mode for empty values
    empty_value: str = "/"

    @property
    def messages_path(self) -> Path:
        return self.messages_dir / f"{self.locale}.yaml"


@lru_cache
def get_settings() -> Settings:
    """Load settings from the environment and displayform.yaml."""
    base_settings = Settings()

    try:
        app_config = load_app_config()
    except FileNotFoundError:
        return base_settings

    updates = {
        key: value
        for key, value in app_config.items()
        if key in Settings.model_fields
    }
    if "messages_dir" in updates:
        updates["messages_dir"] = Path(updates["messages_dir"])

    if updates:
        return base_settings.model_copy(update=updates)

    return base_settings
