"""
SSM hybrid-activation credential provider.

Each node gets its own activation, tagged with the cluster name so the
test cleanup sweeper can find leftovers::

    import boto3
    from nodecreds.credentials import SsmProvider
    from nodecreds.models import Cluster, NodeSpec

    provider = SsmProvider(boto3.client("ssm"), role="my-cluster-ssm-role")
    cfg = provider.nodeadm_config(
        NodeSpec(name="node-1", cluster=Cluster("my-cluster", "us-west-2"))
    )
    print(cfg.to_json())

    # ... after nodeadm uninstall on the host
    provider.verify_uninstall("mi-0123456789abcdef0")
"""

from __future__ import annotations

import logging
import random
import time
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from ..core.settings import REGISTRATION_LIMIT, Settings, load_settings
from ..errors        import ActivationError
from ..models        import Activation, File, NodeSpec
from ..nodeconfig    import SSM, ClusterDetails, HybridOptions, NodeConfig, NodeConfigSpec
from .base           import CredentialProvider, Provider
from .waiter         import wait_for_managed_instance_unregistered

logger = logging.getLogger("nodecreds")

# Returned by CreateActivation while a freshly created IAM role has not
# propagated yet.
_RETRYABLE_CODES = frozenset({"ValidationException"})


class SsmProvider(Provider):
    """Issues SSM hybrid activations and checks instances deregister on uninstall."""

    def __init__(
        self,
        ssm_client: Any,
        role:       str,
        settings:   Settings | None = None,
    ) -> None:
        self.ssm      = ssm_client
        self.role     = role
        self.settings = settings or load_settings()

    def name(self) -> CredentialProvider:
        return CredentialProvider.SSM

    def nodeadm_config(self, node: NodeSpec) -> NodeConfig:
        try:
            activation = self.create_activation(node.cluster.name, node.name)
        except ActivationError as e:
            raise ActivationError(
                f"failed to create SSM activation for node {node.name}: {e}"
            ) from e

        return NodeConfig(
            spec=NodeConfigSpec(
                cluster=ClusterDetails(
                    name=node.cluster.name,
                    region=node.cluster.region,
                ),
                hybrid=HybridOptions(
                    ssm=SSM(
                        activation_id=activation.activation_id,
                        activation_code=activation.activation_code,
                    ),
                    enable_credentials_file=True,
                ),
            ),
        )

    def verify_uninstall(self, instance_id: str) -> None:
        wait_for_managed_instance_unregistered(
            self.ssm,
            instance_id,
            timeout=self.settings.deregister_timeout,
            interval=self.settings.poll_interval,
            max_consecutive_errors=self.settings.max_consecutive_errors,
        )

    def files_for_node(self, node: NodeSpec) -> list[File]:
        return []

    def create_activation(self, cluster_name: str, node_name: str) -> Activation:
        """
        Create an activation for *node_name*, limited to two registrations.

        Retries with jittered exponential backoff while the service answers
        ``ValidationException``.

        :raises ActivationError: If the call fails or the response lacks
                                 the id or code.
        """
        request = {
            "DefaultInstanceName": node_name,
            "IamRole":             self.settings.iam_role_prefix + self.role,
            "RegistrationLimit":   REGISTRATION_LIMIT,
            "Tags": [
                {"Key": self.settings.cluster_tag_key, "Value": cluster_name},
            ],
        }

        attempts = self.settings.activation_max_attempts
        base     = self.settings.activation_retry_delay
        for attempt in range(attempts):
            try:
                resp = self.ssm.create_activation(**request)
                break
            except ClientError as e:
                code = e.response.get("Error", {}).get("Code", "")
                if code not in _RETRYABLE_CODES or attempt == attempts - 1:
                    raise ActivationError(f"creating SSM activation: {e}") from e
                delay = base * (2 ** attempt)
                logger.debug(
                    "CreateActivation %s for %s, retry %d/%d",
                    code, node_name, attempt + 1, attempts - 1,
                )
                time.sleep(delay + random.uniform(0, delay * 0.5))
            except BotoCoreError as e:
                raise ActivationError(f"creating SSM activation: {e}") from e
        else:
            raise ActivationError(
                f"creating SSM activation: no attempt made (max attempts {attempts})"
            )

        activation_id   = resp.get("ActivationId")
        activation_code = resp.get("ActivationCode")
        if not activation_id or not activation_code:
            raise ActivationError(
                "creating SSM activation: response missing ActivationId or ActivationCode"
            )

        logger.info(
            "Created SSM activation %s for node %s (cluster=%s)",
            activation_id, node_name, cluster_name,
        )
        return Activation(activation_id=activation_id, activation_code=activation_code)
