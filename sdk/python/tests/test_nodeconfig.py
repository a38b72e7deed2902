"""Tests for the NodeConfig document."""

import json
import unittest

from nodecreds.nodeconfig import (
    SSM,
    ClusterDetails,
    HybridOptions,
    NodeConfig,
    NodeConfigSpec,
)


def _ssm_config() -> NodeConfig:
    return NodeConfig(
        spec=NodeConfigSpec(
            cluster=ClusterDetails(name="e2e-cluster", region="us-west-2"),
            hybrid=HybridOptions(
                ssm=SSM(activation_id="act-123", activation_code="code-456"),
                enable_credentials_file=True,
            ),
        ),
    )


class TestToDict(unittest.TestCase):
    def test_ssm_document_shape(self):
        self.assertEqual(_ssm_config().to_dict(), {
            "apiVersion": "node.eks.aws/v1alpha1",
            "kind": "NodeConfig",
            "spec": {
                "cluster": {"name": "e2e-cluster", "region": "us-west-2"},
                "hybrid": {
                    "enableCredentialsFile": True,
                    "ssm": {
                        "activationId": "act-123",
                        "activationCode": "code-456",
                    },
                },
            },
        })

    def test_hybrid_omitted_when_unset(self):
        doc = NodeConfig(
            spec=NodeConfigSpec(cluster=ClusterDetails(name="c", region="r")),
        ).to_dict()
        self.assertNotIn("hybrid", doc["spec"])

    def test_credentials_file_flag_omitted_when_false(self):
        cfg = _ssm_config()
        cfg.spec.hybrid.enable_credentials_file = False
        self.assertNotIn("enableCredentialsFile", cfg.to_dict()["spec"]["hybrid"])

    def test_to_json_is_parseable(self):
        doc = json.loads(_ssm_config().to_json())
        self.assertEqual(doc["spec"]["hybrid"]["ssm"]["activationId"], "act-123")


class TestFromDict(unittest.TestCase):
    def test_parses_written_document(self):
        cfg = NodeConfig.from_dict(_ssm_config().to_dict())
        self.assertEqual(cfg, _ssm_config())

    def test_defaults_for_missing_sections(self):
        cfg = NodeConfig.from_dict({})
        self.assertEqual(cfg.api_version, "node.eks.aws/v1alpha1")
        self.assertEqual(cfg.kind, "NodeConfig")
        self.assertIsNone(cfg.spec.hybrid)
        self.assertEqual(cfg.spec.cluster.name, "")


if __name__ == "__main__":
    unittest.main()
