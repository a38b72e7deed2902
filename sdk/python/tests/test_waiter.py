"""Tests for the managed-instance deregistration waiter."""

import time
import unittest
from unittest.mock import MagicMock

from botocore.exceptions import ClientError

from nodecreds.credentials.waiter import wait_for_managed_instance_unregistered
from nodecreds.errors import DeregistrationError, DeregistrationTimeout

INSTANCE_ID = "mi-0123456789abcdef0"

GONE       = {"InstanceInformationList": []}
REGISTERED = {"InstanceInformationList": [{"InstanceId": INSTANCE_ID, "PingStatus": "Online"}]}


def _throttled() -> ClientError:
    return ClientError(
        {"Error": {"Code": "ThrottlingException", "Message": "Rate exceeded"}},
        "DescribeInstanceInformation",
    )


def _wait(ssm, timeout=5.0):
    wait_for_managed_instance_unregistered(
        ssm, INSTANCE_ID, timeout=timeout, interval=0.01,
    )


class TestWaitForUnregistered(unittest.TestCase):
    def test_returns_on_first_empty_result(self):
        ssm = MagicMock()
        ssm.describe_instance_information.side_effect = [REGISTERED, REGISTERED, GONE]

        _wait(ssm)

        self.assertEqual(ssm.describe_instance_information.call_count, 3)
        ssm.describe_instance_information.assert_called_with(
            Filters=[{"Key": "InstanceIds", "Values": [INSTANCE_ID]}],
        )

    def test_single_failure_then_empty_succeeds(self):
        ssm = MagicMock()
        ssm.describe_instance_information.side_effect = [_throttled(), GONE]

        _wait(ssm)

        self.assertEqual(ssm.describe_instance_information.call_count, 2)

    def test_three_failures_tolerated(self):
        ssm = MagicMock()
        ssm.describe_instance_information.side_effect = [
            _throttled(), _throttled(), _throttled(), GONE,
        ]

        _wait(ssm)

        self.assertEqual(ssm.describe_instance_information.call_count, 4)

    def test_fourth_consecutive_failure_aborts(self):
        ssm = MagicMock()
        ssm.describe_instance_information.side_effect = _throttled()

        start = time.monotonic()
        with self.assertRaises(DeregistrationError) as ctx:
            _wait(ssm, timeout=30.0)

        self.assertNotIsInstance(ctx.exception, DeregistrationTimeout)
        self.assertLess(time.monotonic() - start, 30.0)
        self.assertEqual(ssm.describe_instance_information.call_count, 4)
        self.assertIn(INSTANCE_ID, str(ctx.exception))
        self.assertIn("Rate exceeded", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, ClientError)

    def test_success_resets_failure_count(self):
        ssm = MagicMock()
        ssm.describe_instance_information.side_effect = [
            _throttled(), _throttled(), _throttled(),
            REGISTERED,
            _throttled(), _throttled(), _throttled(),
            GONE,
        ]

        _wait(ssm)

        self.assertEqual(ssm.describe_instance_information.call_count, 8)

    def test_times_out_while_still_registered(self):
        ssm = MagicMock()
        ssm.describe_instance_information.return_value = REGISTERED

        with self.assertRaises(DeregistrationTimeout) as ctx:
            _wait(ssm, timeout=0.2)

        self.assertIsInstance(ctx.exception, TimeoutError)
        self.assertEqual(ctx.exception.instance_id, INSTANCE_ID)
        self.assertIn("timed out waiting for instance to unregister", str(ctx.exception))

    def test_non_aws_error_raised_immediately(self):
        ssm = MagicMock()
        ssm.describe_instance_information.side_effect = AttributeError("no such method")

        with self.assertRaises(AttributeError):
            _wait(ssm, timeout=30.0)

        self.assertEqual(ssm.describe_instance_information.call_count, 1)

    def test_polling_stops_after_timeout(self):
        ssm = MagicMock()
        ssm.describe_instance_information.return_value = REGISTERED

        with self.assertRaises(DeregistrationTimeout):
            _wait(ssm, timeout=0.1)
        time.sleep(0.1)
        calls = ssm.describe_instance_information.call_count
        time.sleep(0.1)

        self.assertEqual(ssm.describe_instance_information.call_count, calls)


if __name__ == "__main__":
    unittest.main()
