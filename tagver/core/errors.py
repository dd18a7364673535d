"""Error codes for CLI exit status.

A small enum mapped to shell exit codes, so that release pipelines can tell
a broken checkout apart from a release tagged on the wrong branch.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (bad arguments, unreadable package file)
    - 2: Environment error (not a git checkout, git missing)
    - 3: Version error (branch constraint violated, invalid version strings)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    VERSION_ERROR = 3

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
