"""Score provider client (api-american-football on RapidAPI).

The provider cannot filter by week, so a whole season is fetched at once and
filtered locally by the ingester.
"""

from __future__ import annotations

import json
from typing import Any

import httpx

from ..config import ProviderConfig, settings
from ..errors import ConfigurationError, UpstreamFetchError
from ..logging import logger


class ProviderClient:
    def __init__(
        self,
        api_key: str | None = None,
        config: ProviderConfig | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.config = config or settings.provider_config
        self.api_key = api_key if api_key is not None else settings.rapidapi_key
        if not self.api_key:
            raise ConfigurationError("RAPIDAPI_KEY is required to sync games.")
        self.client = client or httpx.Client(
            base_url=f"https://{self.config.host}",
            headers={
                "X-RapidAPI-Key": self.api_key,
                "X-RapidAPI-Host": self.config.host,
                "User-Agent": "survivor-pool-sync/1.0",
            },
            timeout=self.config.request_timeout_seconds,
        )

    @property
    def source_name(self) -> str:
        return self.config.source_name

    def _truncate_body(self, body: str | None, limit: int = 500) -> str | None:
        if not body:
            return None
        if len(body) <= limit:
            return body
        return f"{body[:limit]}..."

    def fetch_season_events(self, season: int) -> list[dict[str, Any]]:
        """Fetch every game event of `season`. Raises UpstreamFetchError on non-200."""
        params = {
            "league": self.config.league_id,
            "season": season,
            "timezone": self.config.timezone,
        }
        response = self.client.get("/games", params=params)
        if response.status_code != 200:
            body = self._truncate_body(response.text)
            logger.error(
                "provider_api_error",
                status=response.status_code,
                season=season,
                body=body,
            )
            raise UpstreamFetchError(response.status_code, body)

        payload = response.json()
        items = payload.get("response") if isinstance(payload, dict) else None
        if not isinstance(items, list):
            items = []
        if not items:
            logger.warning(
                "provider_empty_season",
                season=season,
                sample=json.dumps(payload, default=str)[:1000],
            )
        logger.info("provider_api_response", season=season, event_count=len(items))
        return items

    def close(self) -> None:
        self.client.close()
