"""
Provider abstraction.

A provider knows how to mint credentials for a node under test, render
them into a :class:`~nodecreds.nodeconfig.NodeConfig`, and verify the
credentials are gone after ``nodeadm uninstall``.
"""

from __future__ import annotations

import abc
import enum

from ..models import File, NodeSpec
from ..nodeconfig import NodeConfig


class CredentialProvider(str, enum.Enum):
    SSM    = "ssm"
    IAM_RA = "iam-ra"


class Provider(abc.ABC):
    """A named source of node credentials."""

    @abc.abstractmethod
    def name(self) -> CredentialProvider: ...

    @abc.abstractmethod
    def nodeadm_config(self, node: NodeSpec) -> NodeConfig:
        """Mint credentials for *node* and return its NodeConfig."""

    @abc.abstractmethod
    def verify_uninstall(self, instance_id: str) -> None:
        """Raise unless the credentials issued to *instance_id* are gone."""

    @abc.abstractmethod
    def files_for_node(self, node: NodeSpec) -> list[File]:
        """Extra files to place on *node* before running nodeadm."""


def is_ssm(name: CredentialProvider | str) -> bool:
    """Return True if *name* identifies the SSM provider."""
    return name == CredentialProvider.SSM
