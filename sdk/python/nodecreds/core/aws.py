"""
boto3 client construction.

Credentials come from the usual boto3 chain (environment, shared config,
instance profile).  botocore's ``standard`` retry mode handles throttling
and transient network errors; service-specific retries live with the
callers that need them.
"""

from __future__ import annotations

import logging
from typing import Any

import boto3
from botocore.config import Config

from .settings import Settings

logger = logging.getLogger("nodecreds")

_RETRY_CONFIG = Config(retries={"mode": "standard", "max_attempts": 5})


def new_ssm_client(settings: Settings, session: "boto3.session.Session | None" = None) -> Any:
    """Return an SSM client for ``settings.region``."""
    session = session or boto3.session.Session()
    logger.debug("Creating SSM client (region=%s)", settings.region)
    return session.client("ssm", region_name=settings.region, config=_RETRY_CONFIG)
