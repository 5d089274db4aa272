from __future__ import annotations

from typing import Any

import requests

from ..core.domain.models import RepositoryMetadata, RepositoryRef

DEFAULT_API_URL = "https://api.github.com"


class GitHubClient:
    """Minimal GitHub REST client for code search and repository lookup."""

    def __init__(
        self,
        *,
        token: str | None,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        })
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"

    def search_code(self, query: str, *, per_page: int, page: int) -> list[RepositoryRef]:
        data = self._get("/search/code", params={"q": query, "per_page": per_page, "page": page})
        refs: list[RepositoryRef] = []
        for item in data.get("items") or []:
            repo = item.get("repository")
            if isinstance(repo, dict):
                refs.append(RepositoryRef.from_api(repo))
        return refs

    def get_repository(self, full_name: str) -> RepositoryMetadata:
        owner, _, name = full_name.partition("/")
        if not owner or not name:
            raise ValueError(f"Expected owner/name, got {full_name!r}")
        return RepositoryMetadata.from_api(self._get(f"/repos/{owner}/{name}"))

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        resp = self._session.get(f"{self._api_url}{path}", params=params, timeout=self._timeout)
        resp.raise_for_status()
        return resp.json()
