"""Kubernetes context helpers."""

import json
import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kops_gce.core.deployments.gce_kops.errors import ContextNotFoundError
from kops_gce.core.deployments.gce_kops.runner import CommandError, CommandRunner

logger = logging.getLogger(__name__)


class ContextDetails(BaseModel):
    """Cluster, user and namespace a context points at."""

    model_config = ConfigDict(extra="ignore")

    cluster: str
    user: str
    namespace: str | None = None


class NamedContext(BaseModel):
    """A named kubeconfig context entry."""

    model_config = ConfigDict(extra="ignore")

    name: str
    context: ContextDetails


class KubeConfigView(BaseModel):
    """Subset of ``kubectl config view -o json`` used here."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    current_context: str = Field(default="", alias="current-context")
    contexts: list[NamedContext] = Field(default_factory=list)

    def find(self, name: str) -> NamedContext | None:
        return next((entry for entry in self.contexts if entry.name == name), None)


def read_kubeconfig(runner: CommandRunner) -> KubeConfigView:
    """Read the active kubeconfig through kubectl."""
    result = runner.run(["kubectl", "config", "view", "-o", "json"], capture=True)
    try:
        return KubeConfigView.model_validate(json.loads(result.stdout or "{}"))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise RuntimeError(f"Unreadable kubeconfig: {exc}") from exc


def rename_context(runner: CommandRunner, old_name: str, new_name: str) -> None:
    """Alias ``new_name`` to the context ``old_name`` and make it active.

    Args:
        runner: Command runner.
        old_name: Context produced by cluster creation.
        new_name: Stable alias to create and switch to.
    """
    entry = read_kubeconfig(runner).find(old_name)
    if entry is None:
        raise ContextNotFoundError(f"Context {old_name} not found in kubeconfig")

    command = [
        "kubectl",
        "config",
        "set-context",
        new_name,
        f"--cluster={entry.context.cluster}",
        f"--user={entry.context.user}",
    ]
    if entry.context.namespace:
        command.append(f"--namespace={entry.context.namespace}")
    runner.run(command, capture=True)
    runner.run(["kubectl", "config", "use-context", new_name], capture=True)


def grant_cluster_admin(runner: CommandRunner, binding_name: str, account: str) -> bool:
    """Bind ``account`` to the cluster-admin role.

    Returns:
        True when the binding was created, False when it already existed.
    """
    try:
        runner.run(
            [
                "kubectl",
                "create",
                "clusterrolebinding",
                binding_name,
                "--clusterrole=cluster-admin",
                f"--user={account}",
            ],
            capture=True,
        )
    except CommandError as exc:
        if "alreadyexists" in exc.result.output.lower().replace(" ", ""):
            logger.info("Cluster role binding %s already exists", binding_name)
            return False
        raise
    return True
