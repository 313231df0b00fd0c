"""Process exit codes.

A failed sync always terminates the CI step with a non-zero status. The
specific value tells the pipeline log reader which stage failed.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the ``relsync`` command.

    These values are used as process exit codes and should remain stable:
    - 0: Success (including the non-tag no-op)
    - 1: Configuration error (missing credential, bad endpoint, bad glob)
    - 2: Release could be neither retrieved nor created
    - 3: Asset listing, deletion or upload failed remotely
    - 4: A local artifact could not be read
    """

    OK = 0
    CONFIG_ERROR = 1
    RELEASE_ERROR = 2
    API_ERROR = 3
    IO_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK

    @property
    def is_error(self) -> bool:
        return self != ErrorCode.OK
