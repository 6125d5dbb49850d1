"""IssueService and IssueLoader: fetch orchestration and stale-response suppression."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime

from .models import IssueModel
from .source import FixtureIssueSource, IssueFetchError, IssueSource

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, int | None, int | None], None]


@dataclass(slots=True)
class FetchResult:
    issues: list[IssueModel] = field(default_factory=list)
    error: IssueFetchError | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class IssueService:
    def __init__(self, source: IssueSource | None = None):
        self.source = source or FixtureIssueSource()

    async def fetch_issues(
        self,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
        *,
        progress: ProgressCallback | None = None,
    ) -> FetchResult:
        """Fetch issues for the window; never raises.

        Without both bounds the unfiltered dataset is returned. Any failure is
        logged and reported through ``FetchResult.error`` with an empty issue
        list, so callers can tell "nothing matched" apart from "fetch failed".
        """
        if progress:
            progress(f"Querying issues from {self.source.label}", None, None)
        try:
            issues = await self.source.list_issues(start, end)
        except Exception as exc:
            logger.exception("Error fetching issues for window %s - %s", start, end)
            return FetchResult(issues=[], error=IssueFetchError(str(exc) or type(exc).__name__))
        if progress:
            progress(f"Loaded {len(issues)} issue(s)", len(issues), len(issues))
        return FetchResult(issues=issues)


class IssueLoader:
    """Apply fetch results to a table engine, newest request wins.

    Every ``load`` call takes a monotonically increasing token. When a fetch
    resolves after a newer one has been issued its result is dropped, so an
    out-of-order response never replaces a more recent view.
    """

    def __init__(self, service: IssueService, engine):
        self.service = service
        self.engine = engine
        self.loading = False
        self.last_error: IssueFetchError | None = None
        self._latest_token = 0

    def _next_token(self) -> int:
        self._latest_token += 1
        return self._latest_token

    def is_current(self, token: int) -> bool:
        return token == self._latest_token

    async def load(
        self,
        start: date | datetime | None = None,
        end: date | datetime | None = None,
        *,
        progress: ProgressCallback | None = None,
    ) -> bool:
        """Fetch and apply; returns False when the response was superseded."""
        token = self._next_token()
        self.loading = True
        result = await self.service.fetch_issues(start, end, progress=progress)
        if not self.is_current(token):
            logger.debug("Dropping stale issue response (token %s, latest %s)", token, self._latest_token)
            return False
        self.engine.set_rows(result.issues)
        self.last_error = result.error
        self.loading = False
        return True
