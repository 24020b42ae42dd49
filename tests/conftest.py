"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

import pytest

from label_bump.config import ResolverConfig
from label_bump.models import PullRequest, Tag

CLOSED_AT = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def config() -> ResolverConfig:
    """A config with no pull request hints and no delays."""
    return ResolverConfig(
        repository="acme/monorepo",
        token="ghp_test",
        prefix="svc-a-",
        retry_interval=0,
        page_delay=0,
    )


@pytest.fixture
def pull_request() -> PullRequest:
    """A merged pull request labelled 'minor'."""
    return PullRequest(
        number=42,
        labels={"minor", "documentation"},
        closed_at=CLOSED_AT,
        created_at=datetime(2024, 4, 30, 9, 0, 0, tzinfo=timezone.utc),
        merge_commit_sha="abc123",
    )


@pytest.fixture
def make_tag() -> Callable[..., Tag]:
    """Factory for tags with a commit SHA derived from the name."""

    def _make(name: str, commit_date: datetime | None = None) -> Tag:
        return Tag(name=name, commit_sha=f"sha-{name}", commit_date=commit_date)

    return _make
