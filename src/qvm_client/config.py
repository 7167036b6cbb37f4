# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qvm-client

"""
Process-wide configuration.

Settings are read from environment variables the first time
:func:`get_config` is called and cached afterwards.

Environment
-----------
.. code-block:: bash

    export QVM_ENDPOINT=https://qvm.example.com/qvm
    export QVM_API_KEY=xxxxxxxxxxxx
    export QVM_TIMEOUT=30
    export QVM_VERIFY_SSL=true

Custom Configuration
--------------------
>>> from qvm_client.config import Config, set_config
>>> set_config(Config(endpoint="http://localhost:5000", api_key="secret"))

Resetting
---------
>>> from qvm_client.config import reset_config
>>> reset_config()  # next get_config() reloads from environment
"""

from __future__ import annotations

import dataclasses
import logging
import os
import threading
from dataclasses import dataclass
from typing import Any

from qvm_client.errors import ConfigurationError


logger = logging.getLogger(__name__)


__all__ = [
    "Config",
    "get_config",
    "set_config",
    "reset_config",
    "load_config",
]


DEFAULT_ENDPOINT = "http://127.0.0.1:5000"
DEFAULT_TIMEOUT = 30.0  # seconds
DEFAULT_USER_AGENT = "qvm-client/0.1"

ENV_ENDPOINT = "QVM_ENDPOINT"
ENV_API_KEY = "QVM_API_KEY"
ENV_TIMEOUT = "QVM_TIMEOUT"
ENV_VERIFY_SSL = "QVM_VERIFY_SSL"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _parse_bool(value: str | None, default: bool = True) -> bool:
    """Parse a boolean environment value, falling back to ``default`` when unset."""
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY


def _parse_timeout(value: str | None) -> float:
    if value is None or not value.strip():
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except ValueError as e:
        raise ConfigurationError(f"{ENV_TIMEOUT} must be a number, got {value!r}") from e
    if timeout <= 0:
        raise ConfigurationError(f"{ENV_TIMEOUT} must be positive, got {value!r}")
    return timeout


@dataclass(frozen=True)
class Config:
    """
    Client configuration.

    Parameters
    ----------
    endpoint : str
        URL that requests are POSTed to.
    api_key : str, optional
        Value sent in the ``X-Api-Key`` header. Required before any
        request is made.
    timeout : float, optional
        Request timeout in seconds. Default is 30.0.
    verify_ssl : bool, optional
        Whether to verify TLS certificates. Default is True.
    user_agent : str, optional
        ``User-Agent`` header value.

    Raises
    ------
    ConfigurationError
        If endpoint is empty or timeout is not positive.
    """

    endpoint: str = DEFAULT_ENDPOINT
    api_key: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    verify_ssl: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self) -> None:
        if not self.endpoint:
            raise ConfigurationError("endpoint is required")
        if self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")

    def require_api_key(self) -> str:
        """
        Return the API key.

        Raises
        ------
        ConfigurationError
            If no API key is configured.
        """
        if not self.api_key:
            raise ConfigurationError(
                f"API key is required. Set the {ENV_API_KEY} environment variable "
                "or pass api_key explicitly."
            )
        return self.api_key

    def with_overrides(self, **overrides: Any) -> Config:
        """Return a copy with the non-None ``overrides`` applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return dataclasses.replace(self, **changes) if changes else self

    def __repr__(self) -> str:
        key = "set" if self.api_key else "unset"
        return (
            f"Config(endpoint={self.endpoint!r}, api_key=<{key}>, "
            f"timeout={self.timeout}, verify_ssl={self.verify_ssl})"
        )


def load_config() -> Config:
    """
    Build a :class:`Config` from environment variables.

    Returns
    -------
    Config
        Fresh configuration instance.

    Raises
    ------
    ConfigurationError
        If a variable holds an unusable value.
    """
    cfg = Config(
        endpoint=os.getenv(ENV_ENDPOINT, "").strip() or DEFAULT_ENDPOINT,
        api_key=os.getenv(ENV_API_KEY) or None,
        timeout=_parse_timeout(os.getenv(ENV_TIMEOUT)),
        verify_ssl=_parse_bool(os.getenv(ENV_VERIFY_SSL), default=True),
    )
    logger.debug("Loaded configuration: %r", cfg)
    return cfg


_config: Config | None = None
_config_lock = threading.Lock()


def get_config() -> Config:
    """Return the process-wide configuration, loading it on first use."""
    global _config
    with _config_lock:
        if _config is None:
            _config = load_config()
        return _config


def set_config(config: Config) -> None:
    """Replace the process-wide configuration."""
    global _config
    with _config_lock:
        _config = config


def reset_config() -> None:
    """Drop the cached configuration so the next access reloads it."""
    global _config
    with _config_lock:
        _config = None
