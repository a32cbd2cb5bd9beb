"""Exit codes and exceptions for hookdeploy."""

from __future__ import annotations

from enum import IntEnum

from hookdeploy.models import HookKind


class ExitCode(IntEnum):
    """Process exit codes, one per failure class."""

    OK = 0
    INTERNAL_ERROR = 1
    USAGE = 2  # click's own usage-error code
    NO_HOOK_SELECTED = 3
    NO_REPO_SPECIFIED = 4
    NOT_GITOLITE_ADMIN = 5
    PRE_COMMIT_UNSUPPORTED = 6
    INVALID_REPOSITORY = 7
    PRE_COMMIT_DEPLOY_FAILED = 8
    PRE_RECEIVE_DEPLOY_FAILED = 9
    POST_UPDATE_DEPLOY_FAILED = 10


DEPLOY_FAILED_CODES: dict[HookKind, ExitCode] = {
    HookKind.PRE_COMMIT: ExitCode.PRE_COMMIT_DEPLOY_FAILED,
    HookKind.PRE_RECEIVE: ExitCode.PRE_RECEIVE_DEPLOY_FAILED,
    HookKind.POST_UPDATE: ExitCode.POST_UPDATE_DEPLOY_FAILED,
}


class DeployError(Exception):
    """Base class for every failure hookdeploy reports to the user."""

    exit_code: ExitCode = ExitCode.INTERNAL_ERROR


class NoHookSelected(DeployError):
    exit_code = ExitCode.NO_HOOK_SELECTED

    def __init__(self) -> None:
        super().__init__("No hooks selected; pass at least one of -a, -c, -r or -u")


class NoRepoSpecified(DeployError):
    exit_code = ExitCode.NO_REPO_SPECIFIED

    def __init__(self) -> None:
        super().__init__("No repository path specified; pass -d <path>")


class NotGitoliteAdmin(DeployError):
    exit_code = ExitCode.NOT_GITOLITE_ADMIN

    def __init__(self, repo_path: str) -> None:
        super().__init__(
            f"{repo_path} is not a gitolite admin directory (conf/gitolite.conf not found)"
        )


class PreCommitUnsupported(DeployError):
    exit_code = ExitCode.PRE_COMMIT_UNSUPPORTED

    def __init__(self) -> None:
        super().__init__("The pre-commit hook cannot be deployed to gitolite")


class InvalidRepository(DeployError):
    exit_code = ExitCode.INVALID_REPOSITORY


class DeployFailed(DeployError):
    """A copy or link operation for a single hook failed."""

    def __init__(self, hook: HookKind, message: str) -> None:
        super().__init__(message)
        self.hook = hook
        self.exit_code = DEPLOY_FAILED_CODES[hook]
