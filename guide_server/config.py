"""Application settings and properties-file configuration."""

from functools import lru_cache
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

logger = structlog.get_logger("config")

DEFAULT_USERGUIDE_PATH = "./userguides"
DEFAULT_USERGUIDE_FILENAME = "user-guide.pdf"
DEFAULT_SERVER_PORT = 8080


class Settings(BaseSettings):
    # App
    APP_NAME: str = "User Guide Server"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PROPERTIES_FILE: str = "application.properties"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Auth
    AUTH_MODE: str = "static"
    AUTH_STATIC_TOKEN: str = "valid-oauth-token"
    JWT_SECRET_KEY: str = "change_me_in_production_please_super_secret"
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = ""
    JWT_AUDIENCE: str = ""

    # Trusted content
    PUBLIC_GUIDE_FILE: str = "./static/user-guide.pdf"
    STATIC_DIR: str = "./static"
    STATIC_URL_PREFIX: str = "/static"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

@lru_cache()
def get_settings() -> Settings:
    return Settings()


class GuideConfig(BaseModel):
    """Immutable configuration loaded once from the properties file.

    Attributes:
        userguide_path: Base directory the user guide must live under.
        userguide_filename: Untrusted filename of the guide, validated per request.
        server_port: TCP port the HTTP server listens on.
    """

    userguide_path: Path = Field(default=Path(DEFAULT_USERGUIDE_PATH), description="Base directory")
    userguide_filename: str = Field(default=DEFAULT_USERGUIDE_FILENAME, description="Configured filename")
    server_port: int = Field(default=DEFAULT_SERVER_PORT, description="Listen port")

    model_config = ConfigDict(frozen=True)


PROPERTY_KEYS = {
    "userguide.path": "userguide_path",
    "userguide.filename": "userguide_filename",
    "server.port": "server_port",
}


def parse_properties(text: str) -> dict[str, str]:
    """Parse ``key=value`` lines, skipping blanks, ``#`` comments and lines without ``=``.

    Args:
        text: Raw properties file contents.

    Returns:
        Mapping of trimmed keys to trimmed values. Later keys override earlier ones.
    """
    properties: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        key, sep, value = line.partition("=")
        if not sep:
            continue

        properties[key.strip()] = value.strip()
    return properties


def load_guide_config(properties_path: str | Path) -> GuideConfig:
    """Load the user guide configuration from a properties file.

    A missing file is not an error: defaults are used and a warning is logged.

    Args:
        properties_path: Path to the properties file.

    Returns:
        Frozen GuideConfig.

    Raises:
        ConfigurationError: If the file cannot be read or holds unusable values.
    """
    properties_path = Path(properties_path)

    try:
        text = properties_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("config_file_missing", path=str(properties_path), using="defaults")
        return GuideConfig()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Could not read config file {properties_path}: {e}") from e

    values = {
        PROPERTY_KEYS[key]: value
        for key, value in parse_properties(text).items()
        if key in PROPERTY_KEYS
    }

    if "userguide_path" in values and not values["userguide_path"]:
        raise ConfigurationError("User guide path cannot be empty")

    if "server_port" in values:
        port = values["server_port"]
        try:
            values["server_port"] = int(port)
        except ValueError:
            raise ConfigurationError(f"Invalid server.port value: {port!r}")
        if not 0 < values["server_port"] < 65536:
            raise ConfigurationError(f"server.port out of range: {port}")

    return GuideConfig(**values)
