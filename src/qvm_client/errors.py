# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qvm-client

"""
Exception hierarchy for qvm-client.

All exceptions raised by qvm-client inherit from :class:`QVMClientError`,
allowing a single catch-all handler for library errors.

Hierarchy
---------
::

    QVMClientError
    ├── ConfigurationError
    ├── TransportError
    ├── MalformedResponseError
    └── InvalidInputLengthError

None of these are retried internally. A failed call has no partial result.

Examples
--------
>>> from qvm_client import QVMConnection
>>> from qvm_client.errors import QVMClientError, TransportError
>>> try:
...     wf, bits = QVMConnection().wavefunction("X 0\\n")
... except TransportError as exc:
...     print(f"server said {exc.status_code}")
... except QVMClientError:
...     print("other client error")
"""

from __future__ import annotations


__all__ = [
    "QVMClientError",
    "ConfigurationError",
    "TransportError",
    "MalformedResponseError",
    "InvalidInputLengthError",
]


class QVMClientError(Exception):
    """
    Base exception for all qvm-client operations.

    ``except QVMClientError`` intercepts any error originating from
    the client.
    """


class ConfigurationError(QVMClientError):
    """Raised when a required setting (API key, endpoint) is missing or invalid."""


class TransportError(QVMClientError):
    """
    Raised when the network round trip fails or the server returns a
    non-success status.

    Parameters
    ----------
    message : str
        Human readable description.
    status_code : int, optional
        HTTP status code, or None when no response was received.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class MalformedResponseError(QVMClientError):
    """
    Raised when a response does not match the expected layout.

    Covers wavefunction payloads whose byte count is inconsistent with
    the requested addresses, missing content length, and structured
    replies of the wrong shape.
    """


class InvalidInputLengthError(QVMClientError, ValueError):
    """
    Raised when a fixed-width decode primitive receives the wrong
    number of bytes.

    Parameters
    ----------
    expected : int
        Required width in bytes.
    actual : int
        Width actually supplied.
    """

    def __init__(self, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected exactly {expected} bytes, got {actual}")
