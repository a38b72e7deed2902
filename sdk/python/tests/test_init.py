"""Tests for the package-level provider factory."""

import os
import unittest
from unittest.mock import MagicMock, patch

import nodecreds
from nodecreds.core.settings import Settings


class TestNewSsmProvider(unittest.TestCase):
    @patch.dict(os.environ, {"NODECREDS_REGION": "eu-west-1"}, clear=True)
    def test_builds_client_for_configured_region(self):
        session = MagicMock()
        provider = nodecreds.new_ssm_provider("ssm-role", session=session)

        self.assertIsInstance(provider, nodecreds.SsmProvider)
        self.assertEqual(provider.role, "ssm-role")
        self.assertIs(provider.ssm, session.client.return_value)
        args, kwargs = session.client.call_args
        self.assertEqual(args, ("ssm",))
        self.assertEqual(kwargs["region_name"], "eu-west-1")
        self.assertEqual(kwargs["config"].retries["mode"], "standard")

    def test_region_overrides_preloaded_settings(self):
        session = MagicMock()
        provider = nodecreds.new_ssm_provider(
            "ssm-role", region="ap-south-1", session=session,
            settings=Settings(region="us-west-2", poll_interval=1.0),
        )

        self.assertEqual(provider.settings.region, "ap-south-1")
        self.assertEqual(provider.settings.poll_interval, 1.0)
        self.assertEqual(session.client.call_args.kwargs["region_name"], "ap-south-1")


if __name__ == "__main__":
    unittest.main()
