"""Error types raised while provisioning a cluster."""


class ProvisioningError(RuntimeError):
    """A high-level provisioning step failed."""

    def __init__(self, step: str, message: str) -> None:
        super().__init__(message)
        self.step = step


class ConfigurationError(ProvisioningError):
    """Required configuration could not be resolved."""

    def __init__(self, message: str) -> None:
        super().__init__("configuration", message)


class UnsupportedPlatformError(RuntimeError):
    """The host operating system has no kops artifact."""


class ContextNotFoundError(RuntimeError):
    """The expected Kubernetes context is missing from the kubeconfig."""
