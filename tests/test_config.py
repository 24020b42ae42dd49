"""Tests for label_bump.config."""

from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from label_bump.config import RACE_WINDOW, ResolverConfig


class TestResolverConfig:
    def test_defaults(self) -> None:
        config = ResolverConfig(repository="acme/monorepo", token="t")
        assert config.prefix == ""
        assert config.pull_request_number is None
        assert config.race_window == RACE_WINDOW == timedelta(minutes=1)
        assert config.api_url == "https://api.github.com"

    def test_token_hidden_from_repr(self) -> None:
        config = ResolverConfig(repository="acme/monorepo", token="ghp_secret")
        assert "ghp_secret" not in repr(config)

    @pytest.mark.parametrize("repository", ["monorepo", "acme/", "a/b/c", "acme/mono repo"])
    def test_rejects_bad_repository(self, repository: str) -> None:
        with pytest.raises(ValidationError):
            ResolverConfig(repository=repository, token="t")

    def test_rejects_non_positive_pull_request(self) -> None:
        with pytest.raises(ValidationError):
            ResolverConfig(repository="acme/monorepo", token="t", pull_request_number=0)

    def test_rejects_zero_attempts(self) -> None:
        with pytest.raises(ValidationError):
            ResolverConfig(repository="acme/monorepo", token="t", retry_attempts=0)
