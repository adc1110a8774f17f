"""Process-level settings, built once and handed to the router."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from config.defaults import DEFAULTS, SAFETY_LIMITS
from config.providers import PROVIDERS

ENV_PREFIX = "SITESMITH_"


def _env_bool(value):
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    credentials: dict[str, str] = field(default_factory=dict)   # provider id -> api key
    max_repair_attempts: int = DEFAULTS["max_repair_attempts"]
    request_timeout: float = DEFAULTS["request_timeout"]
    context_summary_chars: int = DEFAULTS["context_summary_chars"]
    ensemble_enabled: bool = DEFAULTS["ensemble_enabled"]
    ensemble_size: int = DEFAULTS["ensemble_size"]
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None) -> Settings:
        """Read provider keys and SITESMITH_* overrides from the environment.

        Called once at process start. Nothing downstream reads the
        environment again.
        """
        env = os.environ if environ is None else environ

        credentials = {}
        for provider_id, provider in PROVIDERS.items():
            for key_name in provider["env_keys"]:
                value = env.get(key_name, "").strip()
                if value:
                    credentials[provider_id] = value
                    break

        settings = cls(credentials=credentials)

        if env.get(ENV_PREFIX + "MAX_REPAIR_ATTEMPTS"):
            requested = int(env[ENV_PREFIX + "MAX_REPAIR_ATTEMPTS"])
            settings.max_repair_attempts = max(0, min(requested, SAFETY_LIMITS["max_repair_attempts"]))
        if env.get(ENV_PREFIX + "REQUEST_TIMEOUT"):
            settings.request_timeout = float(env[ENV_PREFIX + "REQUEST_TIMEOUT"])
        if env.get(ENV_PREFIX + "CONTEXT_CHARS"):
            settings.context_summary_chars = int(env[ENV_PREFIX + "CONTEXT_CHARS"])
        if env.get(ENV_PREFIX + "ENSEMBLE"):
            settings.ensemble_enabled = _env_bool(env[ENV_PREFIX + "ENSEMBLE"])
        if env.get(ENV_PREFIX + "LOG_LEVEL"):
            settings.log_level = env[ENV_PREFIX + "LOG_LEVEL"].upper()
        return settings

    def has_credential(self, provider_id):
        return bool(self.credentials.get(provider_id))

    def credentialed(self):
        """Credentialed provider ids in discovery order."""
        return [pid for pid in PROVIDERS if self.has_credential(pid)]
