"""Run configuration for the version resolver.

Values usually come from CLI options with environment fallbacks (see
``label_bump.cli``); the resolver itself never reads the environment.
"""

from __future__ import annotations

from datetime import timedelta

from pydantic import BaseModel, Field, SecretStr

DEFAULT_API_URL = "https://api.github.com"

# Tags committed this close to the PR event are treated as produced by the
# run for that same PR, not as a prior release.
RACE_WINDOW = timedelta(minutes=1)

RETRY_INTERVAL_SECONDS = 5.0
RETRY_MAX_ATTEMPTS = 3
TAG_PAGE_DELAY_SECONDS = 1.0


class ResolverConfig(BaseModel):
    """Inputs for a single version resolution.

    Attributes:
        repository: Repository in ``org/repo`` form.
        token: GitHub token used for basic authentication.
        prefix: Tag prefix identifying the workload; may be empty.
        pull_request_number: Explicit pull request number, if known.
        ref: Git ref of the triggering event (e.g. ``refs/pull/12/merge``).
        sha: Commit SHA of the triggering event.
        api_url: Base URL of the GitHub REST API.
        race_window: Tags this close to the PR timestamp are ignored.
        retry_interval: Seconds to wait between HTTP attempts.
        retry_attempts: Maximum HTTP attempts per request.
        page_delay: Seconds to wait between tag list pages.
    """

    repository: str = Field(pattern=r"^[^/\s]+/[^/\s]+$")
    token: SecretStr
    prefix: str = ""
    pull_request_number: int | None = Field(default=None, gt=0)
    ref: str | None = None
    sha: str | None = None
    api_url: str = DEFAULT_API_URL
    race_window: timedelta = RACE_WINDOW
    retry_interval: float = Field(default=RETRY_INTERVAL_SECONDS, ge=0)
    retry_attempts: int = Field(default=RETRY_MAX_ATTEMPTS, ge=1)
    page_delay: float = Field(default=TAG_PAGE_DELAY_SECONDS, ge=0)
