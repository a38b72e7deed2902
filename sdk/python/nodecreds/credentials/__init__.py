"""Credential providers for hybrid nodes."""

from .base   import CredentialProvider, Provider, is_ssm           # noqa: F401
from .ssm    import SsmProvider                                    # noqa: F401
from .waiter import wait_for_managed_instance_unregistered         # noqa: F401

__all__ = [
    "CredentialProvider",
    "Provider",
    "SsmProvider",
    "is_ssm",
    "wait_for_managed_instance_unregistered",
]
