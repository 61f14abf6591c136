"""GitHub repository list fetcher."""

import logging
from datetime import datetime
from typing import Any
from urllib.parse import quote

from pulse_dashboard.data.base import (
    JsonFetcher,
    require_mapping,
    require_number,
    require_str,
)
from pulse_dashboard.data.errors import MalformedResponseError
from pulse_dashboard.models import Repository, RepositorySummary


logger = logging.getLogger(__name__)


def _parse_timestamp(value: Any, context: str) -> datetime:
    if not isinstance(value, str):
        raise MalformedResponseError(f"{context}: 'updated_at' missing or not a string")
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as e:
        raise MalformedResponseError(f"{context}: bad timestamp {value!r}") from e


def parse_repositories(payload: Any, handle: str) -> RepositorySummary:
    """
    Map a ``users/{handle}/repos`` response to a RepositorySummary.

    Server order is kept and the list is capped at five entries. An empty
    list is a valid result; anything other than a list is malformed.
    """
    if not isinstance(payload, list):
        raise MalformedResponseError(
            f"repositories: expected a list, got {type(payload).__name__}"
        )

    repositories = []
    for index, item in enumerate(payload[: RepositorySummary.MAX_ENTRIES]):
        context = f"repositories[{index}]"
        entry = require_mapping(item, context)
        stars = require_number(entry, "stargazers_count", context)
        repositories.append(
            Repository(
                name=require_str(entry, "name", context),
                stars=int(stars),
                updated_at=_parse_timestamp(entry.get("updated_at"), context),
                url=require_str(entry, "html_url", context),
            )
        )

    return RepositorySummary(handle=handle, repositories=tuple(repositories))


class GithubFetcher(JsonFetcher):
    """Fetches a user's most recently updated repositories."""

    name = "github"

    def _default_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.settings.has_github_token():
            headers["Authorization"] = f"Bearer {self.settings.github_token}"
        return headers

    async def fetch(self, handle: str) -> RepositorySummary:
        """Fetch up to five repositories for a user, newest update first."""
        payload = await self._get_json(
            f"{self.settings.github_base_url}/users/{quote(handle, safe='')}/repos",
            params={
                "sort": "updated",
                "direction": "desc",
                "per_page": RepositorySummary.MAX_ENTRIES,
            },
        )
        summary = parse_repositories(payload, handle)
        logger.info(f"  {handle}: {len(summary)} repositories")
        return summary
