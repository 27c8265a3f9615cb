"""Remote store configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

REMOTE_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class RemoteStoreConfig:
    """Holds the canonical store's API configuration values."""

    base_url: str
    api_token: str
    resilience: ResilienceConfig


def get_remote_store_config(*, resilience: ResilienceConfig | None = None) -> RemoteStoreConfig:
    values = require_env_vars(("LEGISYNC_API_URL", "LEGISYNC_API_TOKEN"))
    base_url = values["LEGISYNC_API_URL"].rstrip("/")
    api_token = values["LEGISYNC_API_TOKEN"]
    return RemoteStoreConfig(
        base_url=base_url,
        api_token=api_token,
        resilience=resilience
        or ResilienceConfig(
            name="remote-store",
            base_url=base_url,
            timeout_seconds=REMOTE_TIMEOUT_SECONDS,
            retry=RetryPolicy(total=3),
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            default_headers={
                "Authorization": f"Bearer {api_token}",
                "Accept": "application/json",
            },
        ),
    )
