"""Version parsing and bumping utilities.

Workload tags look like ``{prefix}v{major}.{minor}.{patch}``. Versions are
handled as semver objects so ordering is numeric: v1.10.0 sorts above v1.9.0.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

import semver

from .models import ChangeType, VersionBump
from .shell import fatal

FIRST_VERSION = semver.Version(1, 0, 0)

LABEL_HINT = (
    "Add exactly one of the labels 'patch', 'minor' or 'major' to the pull request."
)

_BUMPS: dict[ChangeType, Callable[[semver.Version], semver.Version]] = {
    ChangeType.PATCH: semver.Version.bump_patch,
    ChangeType.MINOR: semver.Version.bump_minor,
    ChangeType.MAJOR: semver.Version.bump_major,
}


def tag_pattern(prefix: str) -> re.Pattern[str]:
    """Regex matching a full tag name for the given workload prefix."""
    return re.compile(rf"^{re.escape(prefix)}v(\d+)\.(\d+)\.(\d+)$")


def parse_tag_version(tag_name: str, prefix: str) -> semver.Version | None:
    """Extract the version from a workload tag.

    Returns None when the tag is not ``{prefix}vX.Y.Z``, e.g. a tag of a
    workload whose prefix merely starts with ours, or a prerelease tag.
    """
    match = tag_pattern(prefix).match(tag_name)
    if not match:
        return None
    major, minor, patch = (int(part) for part in match.groups())
    return semver.Version(major, minor, patch)


def format_tag(prefix: str, version: semver.Version) -> str:
    return f"{prefix}v{version.major}.{version.minor}.{version.patch}"


def latest_tag(
    tag_names: Iterable[str], prefix: str
) -> tuple[str, semver.Version] | None:
    """Pick the tag with the highest version.

    Tags that do not parse are reported and ignored.
    """
    best: tuple[str, semver.Version] | None = None
    for name in tag_names:
        version = parse_tag_version(name, prefix)
        if version is None:
            print(f"  Skipping {name}: not a {prefix}vX.Y.Z tag")
            continue
        if best is None or version > best[1]:
            best = (name, version)
    return best


def bump(version: semver.Version, change_type: ChangeType | None) -> semver.Version:
    """Apply the increment for a change type.

    Examples:
        1.2.3 + patch → 1.2.4
        1.2.3 + minor → 1.3.0
        1.2.3 + major → 2.0.0
    """
    bumper = _BUMPS.get(change_type) if change_type is not None else None
    if bumper is None:
        fatal(f"Unknown change type {change_type!r}. {LABEL_HINT}")
    return bumper(version)


def next_version(
    tag_names: Iterable[str], prefix: str, change_type: ChangeType | None
) -> VersionBump:
    """Compute the next tag for a workload from its existing tags.

    With no prior tag the workload starts at ``{prefix}v1.0.0`` whatever
    the change type.
    """
    latest = latest_tag(tag_names, prefix)
    if latest is None:
        return VersionBump(old=None, new=format_tag(prefix, FIRST_VERSION))
    name, version = latest
    return VersionBump(old=name, new=format_tag(prefix, bump(version, change_type)))
