"""
Environment-driven settings.

Every value is resolved in the same order: explicit argument, then the
environment variable, then the built-in default.  Self-hosted CI accounts
override the role path and tag key, e.g.::

    NODECREDS_REGION=us-east-1
    NODECREDS_ROLE_PATH_PREFIX=/MyCI/
    NODECREDS_DEREGISTER_TIMEOUT=300
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

_N = TypeVar("_N", int, float)

DEFAULT_REGION           = "us-west-2"
DEFAULT_ROLE_PATH_PREFIX = "/EKSHybridCI/"
DEFAULT_CLUSTER_TAG_KEY  = "Nodeadm-E2E-Tests-Cluster"

# Maximum number of instances one activation may register.
REGISTRATION_LIMIT = 2


def _resolve(explicit: str | None, env_vars: tuple[str, ...], default: str) -> str:
    if explicit:
        return explicit
    for name in env_vars:
        from_env = os.environ.get(name, "").strip()
        if from_env:
            return from_env
    return default


def _resolve_number(
    explicit: float | None,
    env_var:  str,
    default:  _N,
    cast:     Callable[[Any], _N],
) -> _N:
    if explicit is not None:
        return cast(explicit)
    raw = os.environ.get(env_var, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ValueError(f"{env_var} must be a number, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{env_var} must not be negative, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    region:                  str   = DEFAULT_REGION
    role_path_prefix:        str   = DEFAULT_ROLE_PATH_PREFIX
    cluster_tag_key:         str   = DEFAULT_CLUSTER_TAG_KEY
    poll_interval:           float = 5.0
    deregister_timeout:      float = 180.0
    max_consecutive_errors:  int   = 3
    activation_max_attempts: int   = 5
    activation_retry_delay:  float = 1.0

    def __post_init__(self) -> None:
        for name in (
            "poll_interval",
            "deregister_timeout",
            "max_consecutive_errors",
            "activation_retry_delay",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative, got {getattr(self, name)!r}")
        if self.activation_max_attempts < 1:
            raise ValueError(
                f"activation_max_attempts must be at least 1, got {self.activation_max_attempts!r}"
            )

    @property
    def iam_role_prefix(self) -> str:
        """Role path as SSM expects it in ``IamRole``: no leading slash."""
        return self.role_path_prefix.lstrip("/")


def load_settings(
    *,
    region:                  str | None   = None,
    role_path_prefix:        str | None   = None,
    cluster_tag_key:         str | None   = None,
    poll_interval:           float | None = None,
    deregister_timeout:      float | None = None,
    max_consecutive_errors:  int | None   = None,
    activation_max_attempts: int | None   = None,
    activation_retry_delay:  float | None = None,
) -> Settings:
    """Build :class:`Settings` from explicit overrides and ``NODECREDS_*`` env vars."""
    return Settings(
        region=_resolve(region, ("NODECREDS_REGION", "AWS_REGION"), DEFAULT_REGION),
        role_path_prefix=_resolve(
            role_path_prefix, ("NODECREDS_ROLE_PATH_PREFIX",), DEFAULT_ROLE_PATH_PREFIX,
        ),
        cluster_tag_key=_resolve(
            cluster_tag_key, ("NODECREDS_CLUSTER_TAG_KEY",), DEFAULT_CLUSTER_TAG_KEY,
        ),
        poll_interval=_resolve_number(
            poll_interval, "NODECREDS_POLL_INTERVAL", 5.0, float,
        ),
        deregister_timeout=_resolve_number(
            deregister_timeout, "NODECREDS_DEREGISTER_TIMEOUT", 180.0, float,
        ),
        max_consecutive_errors=_resolve_number(
            max_consecutive_errors, "NODECREDS_MAX_CONSECUTIVE_ERRORS", 3, int,
        ),
        activation_max_attempts=_resolve_number(
            activation_max_attempts, "NODECREDS_ACTIVATION_MAX_ATTEMPTS", 5, int,
        ),
        activation_retry_delay=_resolve_number(
            activation_retry_delay, "NODECREDS_ACTIVATION_RETRY_DELAY", 1.0, float,
        ),
    )
