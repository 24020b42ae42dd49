"""Data models for label-bump.

These Pydantic models represent what is read from the GitHub API and what
the resolver hands back to the CLI. All of them are fetched fresh per run.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class ChangeType(str, Enum):
    """Version increment declared by a pull request label."""

    PATCH = "patch"
    MINOR = "minor"
    MAJOR = "major"


class PullRequest(BaseModel):
    """The pull request driving the version bump.

    Attributes:
        number: Pull request number.
        labels: Names of all labels attached to the pull request.
        closed_at: When the pull request was closed, if it has been.
        created_at: When the pull request was opened.
        merge_commit_sha: Merge (or test-merge) commit SHA reported by GitHub.
    """

    model_config = ConfigDict(frozen=True)

    number: int
    labels: frozenset[str] = frozenset()
    closed_at: datetime | None = None
    created_at: datetime
    merge_commit_sha: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> PullRequest:
        """Build from a ``GET /repos/{repo}/pulls/{number}`` payload."""
        return cls(
            number=data["number"],
            labels=frozenset(label["name"] for label in data.get("labels", [])),
            closed_at=data.get("closed_at"),
            created_at=data["created_at"],
            merge_commit_sha=data.get("merge_commit_sha"),
        )

    @property
    def reference_time(self) -> datetime:
        """Timestamp that newly created tags are compared against."""
        return self.closed_at or self.created_at


class Tag(BaseModel):
    """A repository tag and the commit it points at.

    ``commit_date`` is only known after a second request for the commit.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    commit_sha: str
    commit_date: datetime | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Tag:
        """Build from one entry of a ``GET /repos/{repo}/tags`` page."""
        return cls(name=data["name"], commit_sha=data["commit"]["sha"])

    def with_commit_date(self, commit_date: datetime) -> Tag:
        return self.model_copy(update={"commit_date": commit_date})


class VersionBump(BaseModel):
    """Records the version change computed for a workload.

    Attributes:
        old: The latest existing tag, or None for a first release.
        new: The tag name to create next.
    """

    old: str | None
    new: str


class Resolution(BaseModel):
    """Everything a run resolved, ready to be written as step outputs."""

    pull_request: int
    change_type: ChangeType
    bump: VersionBump
