"""captureorder configuration.

All settings come from environment variables, read once by `load_settings()`
at startup. The resulting `Settings` object is handed to whoever needs it
(Mongo, telemetry, Event Hub) instead of every module reading `os.environ`.

Variable names match what the deployment manifests already set
(`DATABASE`, `PASSWORD`, `INSIGHTSKEY`, `EVENTURL`, ...), so the service can be
dropped into an existing environment without renaming anything.
"""

from __future__ import annotations

import os
from typing import Mapping
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigurationError

# Cosmos DB exposes its Mongo API on this port.
COSMOS_MONGO_PORT = 10255
DEFAULT_DATABASE = "orders"


class Settings(BaseModel):
    """Typed service configuration."""

    model_config = ConfigDict(str_strip_whitespace=True)

    # --- MongoDB -------------------------------------------------------------
    # Full connection string. When set it wins over DATABASE/PASSWORD.
    mongo_uri: str = ""

    # Cosmos DB account name; also used as database name and username.
    database: str = ""
    password: str = ""

    collection: str = "orders"
    mongo_timeout_seconds: float = Field(default=60.0, gt=0)

    # --- Application Insights ------------------------------------------------
    # Empty key -> telemetry is skipped.
    insights_key: str = ""

    # --- Event Hub -----------------------------------------------------------
    # Empty URL -> no notification is sent.
    event_url: str = ""
    event_policy_name: str = ""
    event_policy_key: str = ""

    # --- Service -------------------------------------------------------------
    # Channel the order came through (App Service, ACI, AKS...). Used when the
    # client does not send one.
    source: str = ""
    http_timeout_seconds: float = Field(default=10.0, gt=0)
    host: str = "0.0.0.0"
    port: int = 8080

    def database_name(self) -> str:
        """Database holding the orders collection."""
        if self.mongo_uri:
            path = urlparse(self.mongo_uri).path.lstrip("/")
            if path:
                return path
        return self.database or DEFAULT_DATABASE

    def require_database(self) -> None:
        """Raise ConfigurationError unless we know how to reach MongoDB."""
        if self.mongo_uri:
            return
        missing = [
            name
            for name, value in (("DATABASE", self.database), ("PASSWORD", self.password))
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing environment variable(s): {', '.join(missing)} (or set MONGO_URI)"
            )


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from the environment (or the given mapping)."""
    env = os.environ if environ is None else environ

    def get(name: str, default: str = "") -> str:
        return env.get(name, default).strip()

    values: dict[str, str] = {
        "mongo_uri": get("MONGO_URI"),
        "database": get("DATABASE"),
        "password": get("PASSWORD"),
        "collection": get("MONGO_COLLECTION", "orders"),
        "mongo_timeout_seconds": get("MONGO_TIMEOUT_SECONDS", "60"),
        "insights_key": get("INSIGHTSKEY"),
        "event_url": get("EVENTURL"),
        "event_policy_name": get("EVENTPOLICYNAME"),
        "event_policy_key": get("EVENTPOLICYKEY"),
        "source": get("SOURCE"),
        "http_timeout_seconds": get("HTTP_TIMEOUT_SECONDS", "10"),
        "host": get("HOST", "0.0.0.0"),
        "port": get("PORT", "8080"),
    }
    try:
        return Settings.model_validate(values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
