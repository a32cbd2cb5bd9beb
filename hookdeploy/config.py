"""Configuration and path constants for hookdeploy.

The payload scripts (the hook bodies this tool deploys) live in a source
directory that is passed in explicitly. Nothing is derived from where the
installer itself happens to be installed.
"""

from __future__ import annotations

import os
from pathlib import Path

from hookdeploy.models import HookKind

# Environment variable naming the payload source directory
SOURCE_DIR_ENV_VAR = "HOOKDEPLOY_SOURCE_DIR"

# Payload directory shipped next to the Gitolite pre-receive hook
COMMIT_HOOKS_DIR_NAME = "commit_hooks"

# Marker file of a gitolite admin directory
GITOLITE_CONF = Path("conf") / "gitolite.conf"

GITLAB_HOOKS_DIR = Path("custom_hooks")
GITOLITE_HOOKS_DIR = Path("..") / "local" / "hooks" / "repo-specific"
DEFAULT_HOOKS_DIR = Path("hooks")

GITOLITE_HOOK_PREFIX = "puppet-git-hooks."
BITBUCKET_PRE_RECEIVE_DIR = "pre-receive.d"
BITBUCKET_PRE_RECEIVE_NAME = "puppet-git-hooks-pre-receive"


def get_payload_path(source_dir: Path, hook: HookKind) -> Path:
    """Get the payload script for a hook inside the source directory."""
    return source_dir / hook.value


def get_commit_hooks_dir(source_dir: Path) -> Path:
    """Get the commit_hooks payload directory inside the source directory."""
    return source_dir / COMMIT_HOOKS_DIR_NAME


def resolve_source_dir(source_dir: str | Path | None = None) -> Path:
    """Resolve the payload source directory.

    Priority: explicit arg > HOOKDEPLOY_SOURCE_DIR env var > os.getcwd().

    Returns:
        Canonical absolute path of the source directory.
    """
    if source_dir is None or str(source_dir) == "":
        source_dir = os.environ.get(SOURCE_DIR_ENV_VAR) or os.getcwd()
    return Path(source_dir).expanduser().resolve()
