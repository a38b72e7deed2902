"""
nodecreds: credential providers for hybrid-node end-to-end tests.

Usage::

    import nodecreds
    from nodecreds.models import Cluster, NodeSpec

    provider = nodecreds.new_ssm_provider(role="my-cluster-ssm-role")

    node = NodeSpec(name="node-1", cluster=Cluster("my-cluster", "us-west-2"))
    cfg  = provider.nodeadm_config(node)          # creates an SSM activation
    open("nodeConfig.json", "w").write(cfg.to_json())

    # ... run nodeadm init / uninstall on the host ...

    provider.verify_uninstall("mi-0123456789abcdef0")

Settings (region, role path, tag key, poll timings) come from ``NODECREDS_*``
environment variables; see :mod:`nodecreds.core.settings`.
"""

from __future__ import annotations

import dataclasses

import boto3

from .core.aws      import new_ssm_client
from .core.settings import Settings, load_settings
from .credentials   import CredentialProvider, Provider, SsmProvider, is_ssm  # noqa: F401
from .errors        import (                                                  # noqa: F401
    ActivationError,
    DeregistrationError,
    DeregistrationTimeout,
    NodeCredsError,
)
from .nodeconfig    import NodeConfig                                          # noqa: F401


def new_ssm_provider(
    role: str,
    *,
    region:   str | None                     = None,
    session:  "boto3.session.Session | None" = None,
    settings: Settings | None                = None,
) -> SsmProvider:
    """
    Build an :class:`SsmProvider` backed by a fresh boto3 SSM client.

    :param role:     IAM role name (without path) instances assume once registered.
    :param region:   AWS region; overrides ``settings.region`` and the environment.
    :param session:  boto3 session to create the client from.
    :param settings: Preloaded settings; defaults to :func:`load_settings`.
    """
    if settings is None:
        settings = load_settings(region=region)
    elif region:
        settings = dataclasses.replace(settings, region=region)
    return SsmProvider(new_ssm_client(settings, session), role=role, settings=settings)
