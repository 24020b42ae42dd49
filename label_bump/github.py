"""Thin wrapper around the GitHub REST endpoints the resolver needs.

Every request goes through the ``retry`` decorator, which retries transient
failures at a fixed interval up to a capped number of attempts.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from datetime import datetime
from typing import Any, TypeVar

import requests
from pydantic import TypeAdapter

from .config import (
    DEFAULT_API_URL,
    RETRY_INTERVAL_SECONDS,
    RETRY_MAX_ATTEMPTS,
    TAG_PAGE_DELAY_SECONDS,
    ResolverConfig,
)
from .models import PullRequest, Tag

TAGS_PER_PAGE = 100
PULLS_PER_PAGE = 100
REQUEST_TIMEOUT_SECONDS = 30

T = TypeVar("T")

_datetime = TypeAdapter(datetime)


def is_transient(exc: requests.RequestException) -> bool:
    """Whether a failed request is worth retrying.

    Connection errors, timeouts, server errors and rate limiting are
    transient. Any other HTTP error (404, 401, ...) will not get better.
    """
    if isinstance(exc, requests.HTTPError):
        status = exc.response.status_code if exc.response is not None else 0
        return status >= 500 or status in (403, 429)
    return isinstance(exc, (requests.ConnectionError, requests.Timeout))


def retry(
    interval: float = RETRY_INTERVAL_SECONDS, attempts: int = RETRY_MAX_ATTEMPTS
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Retry a request function on transient failures.

    Args:
        interval: Fixed number of seconds to sleep between attempts.
        attempts: Total number of attempts, including the first one.

    The last failure is re-raised once attempts are exhausted.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            attempt = 1
            while True:
                try:
                    return func(*args, **kwargs)
                except requests.RequestException as exc:
                    if attempt >= attempts or not is_transient(exc):
                        raise
                    print(
                        f"  Request failed ({exc}); "
                        f"retrying in {interval:g}s [{attempt}/{attempts}]"
                    )
                    time.sleep(interval)
                    attempt += 1

        return wrapper

    return decorator


class GitHubClient:
    """Authenticated client for one repository."""

    def __init__(
        self,
        repository: str,
        token: str,
        *,
        api_url: str = DEFAULT_API_URL,
        retry_interval: float = RETRY_INTERVAL_SECONDS,
        retry_attempts: int = RETRY_MAX_ATTEMPTS,
        page_delay: float = TAG_PAGE_DELAY_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.repository = repository
        self.api_url = api_url.rstrip("/")
        self.page_delay = page_delay
        self.session = session or requests.Session()
        self.session.auth = ("", token)
        self.session.headers.update({"Accept": "application/vnd.github+json"})
        self._get = retry(retry_interval, retry_attempts)(self._get_once)

    @classmethod
    def from_config(cls, config: ResolverConfig) -> GitHubClient:
        return cls(
            config.repository,
            config.token.get_secret_value(),
            api_url=config.api_url,
            retry_interval=config.retry_interval,
            retry_attempts=config.retry_attempts,
            page_delay=config.page_delay,
        )

    def _get_once(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.api_url}/repos/{self.repository}/{path}"
        response = self.session.get(
            url, params=params, timeout=REQUEST_TIMEOUT_SECONDS
        )
        response.raise_for_status()
        return response.json()

    def list_closed_pull_requests(self) -> Iterator[dict[str, Any]]:
        """Yield raw payloads of closed pull requests, most recently updated first.

        Pages are fetched lazily, so a caller that stops at the first match
        only pays for the pages it read. Merging a pull request updates it,
        which puts a fresh merge near the front whenever it was opened.
        """
        page = 1
        while True:
            batch = self._get(
                "pulls",
                {
                    "state": "closed",
                    "sort": "updated",
                    "direction": "desc",
                    "per_page": PULLS_PER_PAGE,
                    "page": page,
                },
            )
            if not batch:
                return
            yield from batch
            page += 1
            time.sleep(self.page_delay)

    def get_pull_request(self, number: int) -> PullRequest:
        return PullRequest.from_api(
            self._get(f"pulls/{number}", {"state": "closed"})
        )

    def list_tags(self) -> list[Tag]:
        """Fetch every tag in the repository.

        Pages through the tag list until an empty page comes back, pausing
        between pages to stay clear of secondary rate limits.
        """
        tags: list[Tag] = []
        page = 1
        while True:
            batch = self._get("tags", {"per_page": TAGS_PER_PAGE, "page": page})
            if not batch:
                return tags
            tags.extend(Tag.from_api(item) for item in batch)
            page += 1
            time.sleep(self.page_delay)

    def get_commit_date(self, sha: str) -> datetime:
        """Committer timestamp of a commit, falling back to the author's."""
        commit = self._get(f"git/commits/{sha}")
        signature = commit.get("committer") or commit["author"]
        return _datetime.validate_python(signature["date"])
