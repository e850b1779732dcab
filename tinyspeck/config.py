"""Runtime configuration — env-driven via pydantic-settings.

Reads from a ``.env`` file and ``TINYSPECK_*`` environment variables.

Examples
--------
Override via environment::

    export TINYSPECK_TOKEN=xoxb-...
    export TINYSPECK_PORT=8080
    export TINYSPECK_ERROR_POLICY=fail_fast
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict

from tinyspeck.models.classification import ClassifierConfig
from tinyspeck.models.routing import ErrorPolicy


class SpeckConfig(BaseSettings):
    """Adapter configuration with environment variable overrides."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="TINYSPECK_",
        env_file_encoding="utf-8",
    )

    # Web API
    api_base_url: str = "https://slack.com/api/"
    token: str = ""
    request_timeout: float = 10.0

    # Webhook listener
    host: str = "localhost"
    port: int = 3000
    verification_token: str = ""  # empty disables the token check

    # Routing
    error_policy: ErrorPolicy = ErrorPolicy.ISOLATE
    category_topics: bool = False

    # Observability
    log_level: str = "INFO"

    def classifier_config(self) -> ClassifierConfig:
        """Return the classification rule set selected by ``category_topics``."""
        if self.category_topics:
            return ClassifierConfig.with_categories()
        return ClassifierConfig()


# Module-level instance for CLI defaults: `from tinyspeck.config import config`
config = SpeckConfig()
