"""GitLab API client wrapper (REST v4 issues endpoint with page-header pagination)."""

from __future__ import annotations

import hashlib
import json
import time
from typing import Any
from urllib.parse import quote

import requests

from .config import GITLAB_API_PATH, GITLAB_PAGE_SIZE, GITLAB_REQUEST_TIMEOUT


class GitLabAPI:
    def __init__(
        self,
        server: str,
        token: str,
        *,
        project: str | None = None,
        group: str | None = None,
        session: requests.Session | None = None,
        cache_ttl: float = 300.0,
    ):
        if not (project or group):
            raise ValueError("Either a project or a group is required")
        self.server = server.rstrip("/")
        self.project = project
        self.group = group
        self.session = session or requests.Session()
        self.session.headers.update({"PRIVATE-TOKEN": token, "Accept": "application/json"})
        # Simple in-memory cache: {(hash): (timestamp, data)}
        self._cache: dict[str, tuple[float, list]] = {}
        self._cache_ttl = float(cache_ttl)  # seconds

    def clear_cache(self) -> None:
        """Reset the in-memory listing cache."""
        self._cache.clear()

    @property
    def issues_url(self) -> str:
        # Namespaced paths ("group/project") must be URL-encoded as a single segment
        if self.project:
            scope = quote(str(self.project), safe="")
            return f"{self.server}{GITLAB_API_PATH}/projects/{scope}/issues"
        scope = quote(str(self.group), safe="")
        return f"{self.server}{GITLAB_API_PATH}/groups/{scope}/issues"

    def _cache_key(self, url: str, params: dict[str, Any]) -> str:
        payload = {"url": url, "params": params}
        return hashlib.sha256(json.dumps(payload, sort_keys=True, default=str).encode()).hexdigest()

    def list_issues(
        self,
        *,
        updated_after: str | None = None,
        page_size: int = GITLAB_PAGE_SIZE,
    ) -> list[dict[str, Any]]:
        """Return every issue in scope, following ``X-Next-Page`` headers."""
        url = self.issues_url
        params: dict[str, Any] = {"scope": "all", "per_page": page_size, "order_by": "created_at"}
        if updated_after:
            params["updated_after"] = updated_after
        key = self._cache_key(url, params)
        now = time.time()
        cached = self._cache.get(key)
        if cached and (now - cached[0]) < self._cache_ttl:
            return cached[1]
        out: list[dict[str, Any]] = []
        page: str | None = "1"
        while page:
            qp = dict(params)
            qp["page"] = page
            resp = self.session.get(url, params=qp, timeout=GITLAB_REQUEST_TIMEOUT)
            if resp.status_code >= 400:
                raise RuntimeError(f"Issue listing failed {resp.status_code}: {resp.text[:200]}")
            data = resp.json()
            if not isinstance(data, list):
                raise RuntimeError(f"Unexpected issue listing payload type: {type(data)!r}")
            out.extend(data)
            page = (resp.headers.get("X-Next-Page") or "").strip() or None
        self._cache[key] = (now, out)
        return out
