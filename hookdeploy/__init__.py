"""hookdeploy - Deploy git hook scripts into plain, GitLab, Gitolite and BitBucket repositories."""

__version__ = "0.1.0"
__all__ = ["DeploymentRequest", "ResolvedTarget", "deploy", "resolve_target"]

from hookdeploy.deployer import deploy
from hookdeploy.models import DeploymentRequest, ResolvedTarget
from hookdeploy.resolver import resolve_target
