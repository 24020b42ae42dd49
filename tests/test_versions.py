"""Tests for label_bump.versions."""

from __future__ import annotations

import pytest
import semver

from label_bump.models import ChangeType
from label_bump.versions import (
    bump,
    format_tag,
    latest_tag,
    next_version,
    parse_tag_version,
)


class TestParseTagVersion:
    def test_prefixed_tag(self) -> None:
        v = parse_tag_version("svc-a-v1.2.3", "svc-a-")
        assert v == semver.Version(1, 2, 3)

    def test_empty_prefix(self) -> None:
        assert parse_tag_version("v10.0.7", "") == semver.Version(10, 0, 7)

    def test_other_workload_with_longer_prefix(self) -> None:
        """A prefix that merely starts with ours is not our workload."""
        assert parse_tag_version("svc-a-b-v1.0.0", "svc-a-") is None

    def test_prerelease_suffix_rejected(self) -> None:
        assert parse_tag_version("svc-v1.0.0-rc.1", "svc-") is None

    def test_missing_v_rejected(self) -> None:
        assert parse_tag_version("svc-1.0.0", "svc-") is None

    def test_prefix_with_regex_characters(self) -> None:
        """Prefix is matched literally, not as a pattern."""
        assert parse_tag_version("a.bv1.0.0", "a.b") == semver.Version(1, 0, 0)
        assert parse_tag_version("axbv1.0.0", "a.b") is None


class TestFormatTag:
    def test_format(self) -> None:
        assert format_tag("svc-", semver.Version(2, 0, 11)) == "svc-v2.0.11"


class TestLatestTag:
    def test_numeric_not_lexicographic(self) -> None:
        """v1.10.0 is newer than v1.9.0 even though it sorts lower as text."""
        name, version = latest_tag(["p-v1.9.0", "p-v1.10.0", "p-v1.2.0"], "p-")
        assert name == "p-v1.10.0"
        assert version == semver.Version(1, 10, 0)

    def test_major_outranks_minor(self) -> None:
        name, _ = latest_tag(["v1.9.0", "v2.0.0"], "")
        assert name == "v2.0.0"

    def test_skips_unparseable_tags(self) -> None:
        name, _ = latest_tag(["p-vnext", "p-v0.3.1"], "p-")
        assert name == "p-v0.3.1"

    def test_none_when_nothing_parses(self) -> None:
        assert latest_tag(["p-vnext"], "p-") is None

    def test_none_when_empty(self) -> None:
        assert latest_tag([], "p-") is None


class TestBump:
    @pytest.mark.parametrize(
        ("change_type", "expected"),
        [
            (ChangeType.PATCH, semver.Version(1, 2, 4)),
            (ChangeType.MINOR, semver.Version(1, 3, 0)),
            (ChangeType.MAJOR, semver.Version(2, 0, 0)),
        ],
    )
    def test_increments(self, change_type: ChangeType, expected: semver.Version) -> None:
        assert bump(semver.Version(1, 2, 3), change_type) == expected

    def test_unset_change_type_is_fatal(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            bump(semver.Version(1, 2, 3), None)
        assert excinfo.value.code == 1

    def test_unknown_change_type_is_fatal(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit):
            bump(semver.Version(1, 2, 3), "hotfix")  # type: ignore[arg-type]
        assert "exactly one of the labels" in capsys.readouterr().err


class TestNextVersion:
    def test_first_release(self) -> None:
        result = next_version([], "svc-a-", ChangeType.MAJOR)
        assert result.old is None
        assert result.new == "svc-a-v1.0.0"

    def test_first_release_ignores_change_type(self) -> None:
        """Even an unset change type yields v1.0.0 when there is no prior tag."""
        assert next_version([], "", None).new == "v1.0.0"

    def test_bumps_latest(self) -> None:
        result = next_version(
            ["svc-a-v1.2.3", "svc-a-v1.0.0", "svc-a-v0.9.9"], "svc-a-", ChangeType.PATCH
        )
        assert result.old == "svc-a-v1.2.3"
        assert result.new == "svc-a-v1.2.4"

    def test_minor_resets_patch(self) -> None:
        assert next_version(["v1.2.3"], "", ChangeType.MINOR).new == "v1.3.0"

    def test_major_resets_minor_and_patch(self) -> None:
        assert next_version(["v1.2.3"], "", ChangeType.MAJOR).new == "v2.0.0"
