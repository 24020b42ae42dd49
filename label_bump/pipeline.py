"""Version resolution: PR → label → tags → filter → next version.

This module computes the next tag for one workload of a monorepo:
1. Resolve the pull request that triggered the run
2. Read its single bump label (patch, minor or major)
3. Collect the workload's existing tags with their commit dates
4. Drop tags created by a concurrent run for this same pull request
5. Bump the highest remaining version, or start at v1.0.0

Nothing is written to the repository; the caller emits the result as a
step output for a later tag-and-release step.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from datetime import datetime, timedelta

from .config import ResolverConfig
from .github import GitHubClient
from .models import ChangeType, PullRequest, Resolution, Tag
from .shell import fatal, step
from .versions import LABEL_HINT, next_version

MERGE_REF_PATTERN = re.compile(r"^refs/pull/(\d+)/merge$")

BUMP_LABELS = frozenset(change.value for change in ChangeType)


def resolve_pull_request_number(client: GitHubClient, config: ResolverConfig) -> int:
    """Work out which pull request this run is for.

    In order of preference:
    1. The explicitly configured number
    2. The number in a ``refs/pull/<n>/merge`` ref
    3. The closed pull request whose merge commit is the current SHA
    """
    step("Resolving pull request")

    if config.pull_request_number is not None:
        print(f"  #{config.pull_request_number} (explicit)")
        return config.pull_request_number

    if config.ref:
        match = MERGE_REF_PATTERN.match(config.ref)
        if match:
            number = int(match.group(1))
            print(f"  #{number} (from ref {config.ref})")
            return number

    if config.sha:
        for pr in client.list_closed_pull_requests():
            if pr.get("merge_commit_sha") == config.sha:
                number = int(pr["number"])
                print(f"  #{number} (merged as {config.sha})")
                return number

    fatal(
        "Could not determine the pull request number. Pass --pull-request-number "
        "or run the workflow on a pull request merge commit."
    )


def extract_change_type(labels: Iterable[str]) -> ChangeType:
    """Map the pull request's labels to exactly one ChangeType.

    Raises:
        SystemExit: If no bump label or more than one is present.
    """
    found = sorted(BUMP_LABELS.intersection(labels))
    if len(found) != 1:
        detail = f"found {', '.join(found)}" if found else "found none"
        fatal(f"Expected exactly one version label ({detail}). {LABEL_HINT}")
    return ChangeType(found[0])


def collect_tags(client: GitHubClient, prefix: str) -> list[Tag]:
    """List the workload's tags, each with its commit date attached."""
    step(f"Collecting tags with prefix '{prefix}'")

    # Literal prefix match; full version parsing happens later.
    candidates = [tag for tag in client.list_tags() if tag.name.startswith(prefix)]

    tags: list[Tag] = []
    for tag in candidates:
        dated = tag.with_commit_date(client.get_commit_date(tag.commit_sha))
        print(f"  {dated.name} ({dated.commit_date:%Y-%m-%d %H:%M:%S})")
        tags.append(dated)

    if not tags:
        print("  <none>")
    return tags


def drop_racing_tags(
    tags: Iterable[Tag], reference: datetime, window: timedelta
) -> list[Tag]:
    """Remove tags committed within ``window`` of the pull request event.

    Such a tag was most likely created by an earlier run for the same pull
    request; counting it as the latest release would bump twice.
    """
    kept: list[Tag] = []
    for tag in tags:
        if tag.commit_date is not None and abs(tag.commit_date - reference) <= window:
            print(f"  Ignoring {tag.name}: committed within {window} of the PR event")
            continue
        kept.append(tag)
    return kept


def resolve_version(
    config: ResolverConfig, client: GitHubClient | None = None
) -> Resolution:
    """Execute the full resolution for one workload.

    Args:
        config: Repository, credentials, prefix and tuning values.
        client: GitHub client to use. Built from ``config`` if omitted.

    Returns:
        The pull request number, its change type and the computed bump.
    """
    client = client or GitHubClient.from_config(config)

    number = resolve_pull_request_number(client, config)
    pull_request: PullRequest = client.get_pull_request(number)

    step(f"Reading labels of #{number}")
    change_type = extract_change_type(pull_request.labels)
    print(f"  {change_type.value}")

    tags = collect_tags(client, config.prefix)
    tags = drop_racing_tags(tags, pull_request.reference_time, config.race_window)

    step("Computing next version")
    bump = next_version((tag.name for tag in tags), config.prefix, change_type)
    print(f"  {bump.old or '<first release>'} → {bump.new}")

    return Resolution(pull_request=number, change_type=change_type, bump=bump)
