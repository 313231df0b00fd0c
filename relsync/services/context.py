from __future__ import annotations

from dataclasses import dataclass

from relsync.github.client import ReleaseClient
from relsync.output.console import ConsoleProtocol


@dataclass(frozen=True, slots=True)
class SyncContext:
    """Collaborators shared by the resolver and the reconciler."""

    client: ReleaseClient
    console: ConsoleProtocol
