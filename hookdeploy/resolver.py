"""Repository path resolution and hook target selection."""

from __future__ import annotations

import logging
from pathlib import Path

from hookdeploy.config import (
    BITBUCKET_PRE_RECEIVE_DIR,
    BITBUCKET_PRE_RECEIVE_NAME,
    DEFAULT_HOOKS_DIR,
    GITLAB_HOOKS_DIR,
    GITOLITE_CONF,
    GITOLITE_HOOK_PREFIX,
    GITOLITE_HOOKS_DIR,
    get_commit_hooks_dir,
    get_payload_path,
)
from hookdeploy.errors import (
    InvalidRepository,
    NoHookSelected,
    NoRepoSpecified,
    NotGitoliteAdmin,
    PreCommitUnsupported,
)
from hookdeploy.models import (
    DeploymentRequest,
    DeployMode,
    HookKind,
    HookPlacement,
    Platform,
    ResolvedTarget,
)

logger = logging.getLogger("hookdeploy.resolver")


def validate_request(request: DeploymentRequest) -> None:
    """
    Check a request before anything touches the filesystem.

    Raises:
        NoHookSelected: No hook was requested.
        NoRepoSpecified: The repository path is empty.
        PreCommitUnsupported: Gitolite was combined with the pre-commit hook.
        NotGitoliteAdmin: Gitolite was selected but the path has no conf/gitolite.conf.
    """
    if not request.requested_hooks:
        raise NoHookSelected()

    if not request.repo_path:
        raise NoRepoSpecified()

    if request.platform == Platform.GITOLITE:
        if request.install_commit:
            raise PreCommitUnsupported()
        if not (Path(request.repo_path) / GITOLITE_CONF).is_file():
            raise NotGitoliteAdmin(request.repo_path)


def read_gitdir(git_file: Path) -> str | None:
    """Return the gitdir pointer of a .git indirection file, if it has one."""
    for line in git_file.read_text(encoding="utf-8").splitlines():
        if line.startswith("gitdir:"):
            return line.split(":", 1)[1].strip()
    return None


def resolve_repository(repo_path: str, platform: Platform = Platform.PLAIN) -> Path:
    """
    Find the real git directory behind a user-supplied path.

    First match wins:
      1. ``<path>/.git`` is a file: follow its ``gitdir:`` pointer
      2. BitBucket: the path already is the bare repository
      3. ``<path>/hooks`` exists: the path already is a git directory
      4. otherwise: ``<path>/.git``

    Returns:
        Canonical absolute path of the git directory.

    Raises:
        InvalidRepository: The resolved path is not a directory.
    """
    repo = Path(repo_path)
    git_file = repo / ".git"

    if git_file.is_file():
        try:
            gitdir = read_gitdir(git_file)
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidRepository(f"Cannot read submodule git file {git_file}: {e}") from e
        if not gitdir:
            raise InvalidRepository(f"Submodule git file {git_file} has no gitdir entry")
        resolved = (repo / gitdir).resolve()
        logger.debug(f"Following gitdir pointer {git_file} -> {resolved}")
        if not resolved.is_dir():
            raise InvalidRepository(
                f"Submodule git directory {resolved} (from {git_file}) does not exist"
            )
        return resolved

    if platform == Platform.BITBUCKET:
        logger.debug(f"BitBucket repository, using {repo} as-is")
        candidate = repo
    elif (repo / "hooks").exists():
        logger.debug(f"{repo} has a hooks directory, treating it as a git directory")
        candidate = repo
    else:
        candidate = git_file

    resolved = candidate.resolve()
    if not resolved.is_dir():
        raise InvalidRepository(f"{resolved} is not a git repository")
    return resolved


def select_hooks_dir(repo_dir: Path, platform: Platform) -> Path:
    """Return the hooks directory for a resolved git directory."""
    if platform == Platform.GITLAB:
        relative = GITLAB_HOOKS_DIR
    elif platform == Platform.GITOLITE:
        relative = GITOLITE_HOOKS_DIR
    else:
        relative = DEFAULT_HOOKS_DIR
    return (repo_dir / relative).resolve()


def plan_placement(
    hook: HookKind,
    hooks_dir: Path,
    platform: Platform,
    source_dir: Path,
) -> HookPlacement:
    """Decide file name and deployment mode for one hook."""
    source = get_payload_path(source_dir, hook)

    if platform == Platform.GITOLITE:
        if hook == HookKind.PRE_COMMIT:
            raise PreCommitUnsupported()
        extra_dirs: tuple[Path, ...] = ()
        if hook == HookKind.PRE_RECEIVE:
            extra_dirs = (get_commit_hooks_dir(source_dir),)
        return HookPlacement(
            hook=hook,
            source=source,
            destination=hooks_dir / f"{GITOLITE_HOOK_PREFIX}{hook.value}",
            mode=DeployMode.COPY,
            extra_dirs=extra_dirs,
        )

    if platform == Platform.BITBUCKET and hook == HookKind.PRE_RECEIVE:
        destination = hooks_dir / BITBUCKET_PRE_RECEIVE_DIR / BITBUCKET_PRE_RECEIVE_NAME
    else:
        destination = hooks_dir / hook.value

    return HookPlacement(
        hook=hook,
        source=source,
        destination=destination,
        mode=DeployMode.SYMLINK,
    )


def resolve_target(request: DeploymentRequest, source_dir: Path) -> ResolvedTarget:
    """
    Validate a request and derive everything the deployer needs.

    Args:
        request: The deployment request
        source_dir: Directory holding the payload scripts

    Returns:
        ResolvedTarget with the hooks directory and one placement per requested hook.
    """
    validate_request(request)

    repo_dir = resolve_repository(request.repo_path, request.platform)
    hooks_dir = select_hooks_dir(repo_dir, request.platform)
    logger.debug(f"Repository {repo_dir}, hooks directory {hooks_dir}")

    placements = tuple(
        plan_placement(hook, hooks_dir, request.platform, source_dir)
        for hook in request.requested_hooks
    )
    return ResolvedTarget(
        repo_dir=repo_dir,
        hooks_dir=hooks_dir,
        platform=request.platform,
        placements=placements,
    )
