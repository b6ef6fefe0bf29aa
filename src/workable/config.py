# src/workable/config.py
import os
from dataclasses import dataclass


DEFAULT_TIMEOUT = 20.0


class ConfigurationError(RuntimeError):
    """Missing or unusable Workable settings. Raised before any HTTP call."""


@dataclass(frozen=True)
class Settings:
    subdomain: str  # e.g. "acme" for acme.workable.com
    api_key: str
    timeout: float = DEFAULT_TIMEOUT

    @property
    def base_url(self) -> str:
        return f"https://{self.subdomain}.workable.com/spi/v3/"

    def validate(self) -> "Settings":
        if not self.subdomain or not self.subdomain.strip():
            raise ConfigurationError("Set WORKABLE_SUBDOMAIN (e.g. in .env) before calling the Workable API.")
        if not self.api_key or not self.api_key.strip():
            raise ConfigurationError("Set WORKABLE_API_KEY (e.g. in .env) before calling the Workable API.")
        return self


def load_settings() -> Settings:
    """Read settings from the environment (call load_dotenv() first if you use a .env file)."""
    raw_timeout = os.getenv("WORKABLE_TIMEOUT", "")
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
    except ValueError as e:
        raise ConfigurationError(f"WORKABLE_TIMEOUT must be a number of seconds, got {raw_timeout!r}") from e

    return Settings(
        subdomain=os.getenv("WORKABLE_SUBDOMAIN", "").strip(),
        api_key=os.getenv("WORKABLE_API_KEY", "").strip(),
        timeout=timeout,
    ).validate()
