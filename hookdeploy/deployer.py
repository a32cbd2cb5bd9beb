"""Filesystem side of hook deployment: forced links and copies."""

from __future__ import annotations

import errno
import logging
import shutil
from pathlib import Path

from hookdeploy.models import DeployMode, HookOutcome, HookPlacement, ResolvedTarget

logger = logging.getLogger("hookdeploy.deployer")


def _force_symlink(source: Path, destination: Path) -> None:
    """Point destination at source, replacing whatever is there."""
    if not source.exists():
        raise FileNotFoundError(errno.ENOENT, "Payload not found", str(source))

    if destination.is_symlink() or destination.exists():
        destination.unlink()
    destination.symlink_to(source)


def _force_copy(source: Path, destination: Path) -> None:
    """Copy source over destination and make it executable."""
    # Never write through an old link into the payload it points at
    if destination.is_symlink():
        destination.unlink()
    elif destination.is_dir():
        raise IsADirectoryError(errno.EISDIR, "Destination is a directory", str(destination))
    shutil.copy2(source, destination)
    destination.chmod(0o755)


def deploy_hook(placement: HookPlacement) -> HookOutcome:
    """
    Deploy a single hook.

    Parent directories are created first; the link or copy only runs once
    that succeeded. OS errors are captured in the outcome, never raised.
    """
    destination = placement.destination
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)

        if placement.mode == DeployMode.SYMLINK:
            _force_symlink(placement.source, destination)
        else:
            _force_copy(placement.source, destination)
            for extra_dir in placement.extra_dirs:
                shutil.copytree(
                    extra_dir,
                    destination.parent / extra_dir.name,
                    dirs_exist_ok=True,
                )
    except OSError as e:
        logger.error(f"Failed to deploy {placement.hook.value} to {destination}: {e}")
        return HookOutcome(
            hook=placement.hook,
            destination=destination,
            mode=placement.mode,
            error=f"Failed to deploy {placement.hook.value} to {destination}: {e}",
        )

    logger.info(f"Deployed {placement.hook.value} ({placement.mode.value}) to {destination}")
    return HookOutcome(hook=placement.hook, destination=destination, mode=placement.mode)


def deploy(target: ResolvedTarget) -> list[HookOutcome]:
    """
    Deploy every placement of a resolved target, in order.

    A failed step does not stop the remaining ones, and nothing that
    already succeeded is rolled back.

    Returns:
        One outcome per placement.
    """
    return [deploy_hook(placement) for placement in target.placements]

