"""
Inputs handed to credential providers by the test harness.

Only the fields the providers read are modelled here.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Cluster:
    name:   str
    region: str


@dataclass(frozen=True)
class NodeSpec:
    """A hybrid node under test."""
    name:    str
    cluster: Cluster


@dataclass(frozen=True)
class File:
    """An extra file a provider wants written onto the node before nodeadm runs."""
    path:        str
    content:     str
    permissions: str = "0644"


@dataclass(frozen=True)
class Activation:
    """An SSM hybrid activation: opaque id + code issued by the service."""
    activation_id:   str
    activation_code: str
