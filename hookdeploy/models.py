"""Pydantic models for hookdeploy."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class Platform(str, Enum):
    """Hosting platform convention of the target repository."""

    PLAIN = "plain"
    GITLAB = "gitlab"
    GITOLITE = "gitolite"
    BITBUCKET = "bitbucket"


class HookKind(str, Enum):
    """Hook types this tool can deploy, in deployment order."""

    PRE_COMMIT = "pre-commit"
    PRE_RECEIVE = "pre-receive"
    POST_UPDATE = "post-update"


class DeployMode(str, Enum):
    """How a payload lands in the hooks directory."""

    SYMLINK = "symlink"
    COPY = "copy"


class DeploymentRequest(BaseModel):
    """What the user asked for on the command line."""

    model_config = ConfigDict(frozen=True)

    repo_path: str = ""
    install_commit: bool = False
    install_receive: bool = False
    install_update: bool = False
    platform: Platform = Platform.PLAIN

    @property
    def requested_hooks(self) -> list[HookKind]:
        """Requested hooks, always in deployment order."""
        hooks = []
        if self.install_commit:
            hooks.append(HookKind.PRE_COMMIT)
        if self.install_receive:
            hooks.append(HookKind.PRE_RECEIVE)
        if self.install_update:
            hooks.append(HookKind.POST_UPDATE)
        return hooks


class HookPlacement(BaseModel):
    """Where and how a single hook payload is deployed."""

    model_config = ConfigDict(frozen=True)

    hook: HookKind
    source: Path
    destination: Path
    mode: DeployMode
    extra_dirs: tuple[Path, ...] = Field(
        default=(), description="Payload directories copied next to the destination"
    )


class ResolvedTarget(BaseModel):
    """Hooks directory and placements derived from a DeploymentRequest."""

    model_config = ConfigDict(frozen=True)

    repo_dir: Path
    hooks_dir: Path
    platform: Platform
    placements: tuple[HookPlacement, ...] = ()


class HookOutcome(BaseModel):
    """Result of one deployment step."""

    hook: HookKind
    destination: Path
    mode: DeployMode
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None
