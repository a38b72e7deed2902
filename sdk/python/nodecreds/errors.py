"""Exception hierarchy raised by the credential providers."""

from __future__ import annotations


class NodeCredsError(RuntimeError):
    """Base class for every error raised by :mod:`nodecreds`."""


class ActivationError(NodeCredsError):
    """Creating an SSM hybrid activation failed."""


class DeregistrationError(NodeCredsError):
    """Querying managed-instance inventory failed while waiting for deregistration."""


class DeregistrationTimeout(DeregistrationError, TimeoutError):
    """The instance was still registered when the deadline elapsed."""

    def __init__(self, instance_id: str) -> None:
        super().__init__(f"timed out waiting for instance to unregister: {instance_id}")
        self.instance_id = instance_id
