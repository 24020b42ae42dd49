"""CLI entry point for label-bump."""

from __future__ import annotations

from datetime import timedelta
from importlib.metadata import version as pkg_version
from pathlib import Path

import click
from pydantic import ValidationError

from label_bump.config import (
    DEFAULT_API_URL,
    RACE_WINDOW,
    RETRY_INTERVAL_SECONDS,
    RETRY_MAX_ATTEMPTS,
    TAG_PAGE_DELAY_SECONDS,
    ResolverConfig,
)
from label_bump.pipeline import resolve_version
from label_bump.shell import write_output

__version__ = pkg_version("label-bump")
TEMPLATES_DIR = Path(__file__).parent / "templates"


def _version_range() -> str:
    """Compute pip version range: >=current,<next_minor."""
    v = __version__
    major, minor, *_ = v.split(".")
    return f'"label-bump>={v},<{major}.{int(minor) + 1}.0"'


@click.group()
@click.version_option(__version__, prog_name="label-bump")
def cli() -> None:
    """Next semantic version tag for a monorepo workload, from PR labels."""


@cli.command()
@click.option(
    "--workflow-dir",
    type=click.Path(),
    default=".github/workflows",
    show_default=True,
    help="Directory to write the workflow file.",
)
@click.option("--prefix", default="", help="Tag prefix of the workload.")
def init(workflow_dir: str, prefix: str) -> None:
    """Scaffold a GitHub Actions workflow that resolves the next version."""
    root = Path.cwd()

    if not (root / ".git").exists():
        raise click.ClickException("Not a git repository. Run from the repo root.")

    dest_dir = root / workflow_dir
    dest_dir.mkdir(parents=True, exist_ok=True)
    dest = dest_dir / "next-version.yml"

    rendered = (
        (TEMPLATES_DIR / "next-version.yml")
        .read_text()
        .replace("__LABEL_BUMP_VERSION__", _version_range())
        .replace("__TAG_PREFIX__", prefix)
    )
    dest.write_text(rendered)

    click.echo(f"✓ Wrote workflow to {dest.relative_to(root)}")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Create the labels 'patch', 'minor' and 'major' in the repository")
    click.echo("  2. Commit and push the workflow file")
    click.echo("  3. Add a tag-and-release step that reads steps.version.outputs.newVersion")


@cli.command()
@click.option(
    "--repository",
    envvar=["REPOSITORY", "GITHUB_REPOSITORY"],
    required=True,
    help="Repository as org/repo.",
)
@click.option(
    "--token",
    envvar=["GH_TOKEN", "GITHUB_TOKEN"],
    required=True,
    help="GitHub token. Falls back to GH_TOKEN / GITHUB_TOKEN.",
)
@click.option(
    "--prefix", envvar="TAG_PREFIX", default="", help="Tag prefix of the workload."
)
@click.option(
    "--pull-request-number",
    envvar="PULL_REQUEST_NUMBER",
    type=int,
    default=None,
    help="Pull request to read the bump label from.",
)
@click.option("--ref", envvar=["GH_REF", "GITHUB_REF"], default=None, help="Triggering git ref.")
@click.option("--sha", envvar=["GH_SHA", "GITHUB_SHA"], default=None, help="Triggering commit SHA.")
@click.option(
    "--api-url",
    envvar="GITHUB_API_URL",
    default=DEFAULT_API_URL,
    show_default=True,
    help="GitHub REST API base URL.",
)
@click.option(
    "--race-window-seconds",
    type=float,
    default=RACE_WINDOW.total_seconds(),
    show_default=True,
    help="Ignore tags committed this close to the PR event.",
)
@click.option(
    "--retry-interval",
    type=float,
    default=RETRY_INTERVAL_SECONDS,
    show_default=True,
    help="Seconds between HTTP retries.",
)
@click.option(
    "--retry-attempts",
    type=int,
    default=RETRY_MAX_ATTEMPTS,
    show_default=True,
    help="Maximum attempts per HTTP request.",
)
@click.option(
    "--page-delay",
    type=float,
    default=TAG_PAGE_DELAY_SECONDS,
    show_default=True,
    help="Seconds to wait between tag list pages.",
)
@click.option(
    "--github-output",
    envvar="GITHUB_OUTPUT",
    type=click.Path(dir_okay=False),
    default=None,
    help="Step output file. Prints to stdout when unset.",
)
def resolve(
    repository: str,
    token: str,
    prefix: str,
    pull_request_number: int | None,
    ref: str | None,
    sha: str | None,
    api_url: str,
    race_window_seconds: float,
    retry_interval: float,
    retry_attempts: int,
    page_delay: float,
    github_output: str | None,
) -> None:
    """Compute the next version tag and emit it as a step output."""
    try:
        config = ResolverConfig(
            repository=repository,
            token=token,
            prefix=prefix,
            pull_request_number=pull_request_number,
            ref=ref or None,
            sha=sha or None,
            api_url=api_url,
            race_window=timedelta(seconds=race_window_seconds),
            retry_interval=retry_interval,
            retry_attempts=retry_attempts,
            page_delay=page_delay,
        )
    except ValidationError as exc:
        raise click.UsageError(str(exc)) from exc

    resolution = resolve_version(config)

    write_output(github_output, "newVersion", resolution.bump.new)
    write_output(github_output, "pullRequestNumber", str(resolution.pull_request))
