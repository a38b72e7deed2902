"""
Wait for a managed instance to drop out of SSM inventory.

After ``nodeadm uninstall`` the instance deregisters itself from Systems
Manager.  :func:`wait_for_managed_instance_unregistered` polls
``DescribeInstanceInformation`` on a background thread and blocks the
caller until the instance is gone, the query keeps failing, or the
deadline passes.
"""

from __future__ import annotations

import logging
import queue
import threading
import time
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from ..errors import DeregistrationError, DeregistrationTimeout

logger = logging.getLogger("nodecreds")


def wait_for_managed_instance_unregistered(
    ssm_client:             Any,
    instance_id:            str,
    *,
    timeout:                float = 180.0,
    interval:               float = 5.0,
    max_consecutive_errors: int   = 3,
) -> None:
    """
    Block until *instance_id* no longer appears in SSM inventory.

    Up to *max_consecutive_errors* failed queries in a row are tolerated;
    a successful query resets the count.
    Only AWS errors count as query failures; anything else the client
    raises is re-raised to the caller at once.

    :raises DeregistrationError:   On the next failure past the tolerance,
                                   or any failure after the deadline.
    :raises DeregistrationTimeout: If the instance is still registered
                                   after *timeout* seconds.
    """
    deadline = time.monotonic() + timeout
    stop     = threading.Event()
    # One-shot result slot: None on success, the exception otherwise.
    result: queue.Queue = queue.Queue(maxsize=1)

    def _poll() -> None:
        consecutive_errors = 0
        while not stop.is_set():
            try:
                output = ssm_client.describe_instance_information(
                    Filters=[{"Key": "InstanceIds", "Values": [instance_id]}],
                )
            except (ClientError, BotoCoreError) as e:
                consecutive_errors += 1
                if consecutive_errors > max_consecutive_errors or time.monotonic() >= deadline:
                    err = DeregistrationError(
                        f"failed to describe instance information {instance_id}: {e}"
                    )
                    err.__cause__ = e
                    result.put(err)
                    return
                logger.warning(
                    "describe_instance_information %s failed (%d/%d): %s",
                    instance_id, consecutive_errors, max_consecutive_errors, e,
                )
            except Exception as e:
                result.put(e)
                return
            else:
                if not output.get("InstanceInformationList"):
                    result.put(None)
                    return
                consecutive_errors = 0
                logger.debug("Instance %s still registered", instance_id)

            stop.wait(interval)

    threading.Thread(
        target=_poll, name="nodecreds-deregister-wait", daemon=True
    ).start()

    try:
        outcome = result.get(timeout=max(deadline - time.monotonic(), 0.0))
    except queue.Empty:
        raise DeregistrationTimeout(instance_id) from None
    finally:
        stop.set()

    if outcome is not None:
        raise outcome
    logger.info("Instance %s deregistered from SSM", instance_id)
