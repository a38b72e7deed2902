"""
NodeConfig document consumed by ``nodeadm init``.

Only the subset of the ``node.eks.aws/v1alpha1`` schema that credential
providers populate is modelled.  :meth:`NodeConfig.to_dict` emits the
camelCase field names nodeadm expects::

    apiVersion: node.eks.aws/v1alpha1
    kind: NodeConfig
    spec:
      cluster:
        name: my-cluster
        region: us-west-2
      hybrid:
        enableCredentialsFile: true
        ssm:
          activationId: ...
          activationCode: ...
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

API_VERSION = "node.eks.aws/v1alpha1"
KIND        = "NodeConfig"


@dataclass
class ClusterDetails:
    name:   str = ""
    region: str = ""


@dataclass
class SSM:
    activation_id:   str
    activation_code: str


@dataclass
class HybridOptions:
    ssm:                     SSM | None = None
    enable_credentials_file: bool       = False


@dataclass
class NodeConfigSpec:
    cluster: ClusterDetails       = field(default_factory=ClusterDetails)
    hybrid:  HybridOptions | None = None


@dataclass
class NodeConfig:
    spec:        NodeConfigSpec = field(default_factory=NodeConfigSpec)
    api_version: str            = API_VERSION
    kind:        str            = KIND

    def to_dict(self) -> dict[str, Any]:
        cluster: dict[str, Any] = {}
        if self.spec.cluster.name:
            cluster["name"] = self.spec.cluster.name
        if self.spec.cluster.region:
            cluster["region"] = self.spec.cluster.region

        spec: dict[str, Any] = {"cluster": cluster}
        hybrid = self.spec.hybrid
        if hybrid is not None:
            h: dict[str, Any] = {}
            if hybrid.enable_credentials_file:
                h["enableCredentialsFile"] = True
            if hybrid.ssm is not None:
                h["ssm"] = {
                    "activationId":   hybrid.ssm.activation_id,
                    "activationCode": hybrid.ssm.activation_code,
                }
            spec["hybrid"] = h

        return {"apiVersion": self.api_version, "kind": self.kind, "spec": spec}

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "NodeConfig":
        """Parse a document produced by :meth:`to_dict` (or written by hand)."""
        spec    = data.get("spec") or {}
        cluster = spec.get("cluster") or {}
        hybrid  = spec.get("hybrid")

        hybrid_opts = None
        if hybrid is not None:
            ssm = hybrid.get("ssm")
            hybrid_opts = HybridOptions(
                ssm=SSM(
                    activation_id=ssm.get("activationId", ""),
                    activation_code=ssm.get("activationCode", ""),
                ) if ssm is not None else None,
                enable_credentials_file=bool(hybrid.get("enableCredentialsFile", False)),
            )

        return cls(
            spec=NodeConfigSpec(
                cluster=ClusterDetails(
                    name=cluster.get("name", ""),
                    region=cluster.get("region", ""),
                ),
                hybrid=hybrid_opts,
            ),
            api_version=data.get("apiVersion", API_VERSION),
            kind=data.get("kind", KIND),
        )
