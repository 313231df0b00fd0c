from __future__ import annotations

from dataclasses import dataclass

from relsync.core.config import SyncSettings
from relsync.github.client import ReleaseClient
from relsync.github.http import UrllibReleaseClient
from relsync.output.console import ConsoleProtocol, RichConsole
from relsync.services.sync import ClientFactory


def urllib_client_factory(timeout: float | None = None) -> ClientFactory:
    def make(settings: SyncSettings) -> ReleaseClient:
        return UrllibReleaseClient(
            api_key=settings.api_key,
            base_url=settings.base_url,
            upload_url=settings.upload_url,
            timeout=timeout,
        )

    return make


@dataclass(frozen=True, slots=True)
class CLIContext:
    console: ConsoleProtocol
    make_client: ClientFactory


def build_context(*, no_color: bool = False, timeout: float | None = None) -> CLIContext:
    return CLIContext(
        console=RichConsole(no_color=no_color),
        make_client=urllib_client_factory(timeout),
    )
