from __future__ import annotations

from pathlib import Path

import typer

from relsync.cli.commands._helpers import exit_on_error, exit_with_code, split_patterns
from relsync.cli.context import build_context
from relsync.core.config import BuildInfo, SyncSettings, load_file_config
from relsync.core.result import Err
from relsync.output.errors import print_sync_error, sync_error_exit_code
from relsync.services.errors import ConfigurationError
from relsync.services.sync import run_sync


def publish(
    base_url: str | None = typer.Option(
        None, "--base-url", envvar="PLUGIN_BASE_URL", help="API root for release metadata"
    ),
    upload_url: str | None = typer.Option(
        None, "--upload-url", envvar="PLUGIN_UPLOAD_URL", help="API root for asset uploads"
    ),
    api_key: str | None = typer.Option(
        None,
        "--api-key",
        envvar=["PLUGIN_API_KEY", "GITHUB_TOKEN"],
        help="Access token",
        show_default=False,
    ),
    files: list[str] | None = typer.Option(
        None,
        "--file",
        "-f",
        envvar="PLUGIN_FILES",
        help="Glob pattern of artifacts to attach (repeatable, comma separated)",
    ),
    config: Path | None = typer.Option(
        None, "--config", envvar="RELSYNC_CONFIG", help="TOML file with a [release] table"
    ),
    workspace: Path | None = typer.Option(
        None, "--workspace", envvar="DRONE_WORKSPACE", help="Directory patterns are relative to"
    ),
    event: str = typer.Option("", "--event", envvar="DRONE_BUILD_EVENT", help="Build event"),
    owner: str = typer.Option("", "--owner", envvar="DRONE_REPO_OWNER", help="Repository owner"),
    repo: str = typer.Option("", "--repo", envvar="DRONE_REPO_NAME", help="Repository name"),
    ref: str = typer.Option("", "--ref", envvar="DRONE_COMMIT_REF", help="Git ref of the build"),
    tag: str | None = typer.Option(
        None, "--tag", envvar="DRONE_TAG", help="Tag name (defaults to the last ref component)"
    ),
    timeout: float | None = typer.Option(
        None, "--timeout", help="Per-request timeout in seconds (default: none)"
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
) -> None:
    """Attach build artifacts to the GitHub release of the current tag."""
    ctx = build_context(no_color=no_color, timeout=timeout)
    build = BuildInfo(event=event, owner=owner, repo=repo, ref=ref, tag=tag)

    file_config = None
    if config is not None and build.is_tag:
        loaded = load_file_config(config)
        if isinstance(loaded, Err):
            error = ConfigurationError.from_config_error(loaded.error)
            print_sync_error(error, ctx.console)
            exit_with_code(sync_error_exit_code(error))
        file_config = loaded.value

    settings = SyncSettings.resolve(
        base_url=base_url,
        upload_url=upload_url,
        api_key=api_key,
        files=split_patterns(files),
        workspace=workspace,
        file_config=file_config,
    )
    result = run_sync(settings, build, console=ctx.console, make_client=ctx.make_client)
    exit_on_error(result, ctx)
