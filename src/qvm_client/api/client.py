# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qvm-client

"""
Connection to a remote QVM service.

Examples
--------
>>> from qvm_client import Program, QVMConnection
>>> with QVMConnection(api_key="xxxxxxxx") as qvm:
...     bell = Program("H 0", "CNOT 0 1", "MEASURE 0 [0]", "MEASURE 1 [1]")
...     samples = qvm.run(bell, [0, 1], num_trials=10)
...     wf, bits = qvm.wavefunction(Program("H 0", "CNOT 0 1"))

Notes
-----
Requests are synchronous and never retried. A timeout, connection
failure or non-success status ends the call with :class:`TransportError`.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import numpy as np
import requests
from numpy.typing import NDArray
from qvm_client.api.payloads import (
    multishot_payload,
    ping_payload,
    validate_addresses,
    version_payload,
    wavefunction_payload,
)
from qvm_client.config import Config, get_config
from qvm_client.errors import MalformedResponseError, TransportError
from qvm_client.wire.wavefunction import decode


logger = logging.getLogger(__name__)


def _error_detail(response: requests.Response) -> str:
    """Extract a readable error message from a failed response."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        for key in ("error", "detail", "message"):
            if key in body:
                return str(body[key])
    return response.text


def content_length(response: requests.Response) -> int:
    """
    Return the exact length of the decoded response body.

    The ``Content-Length`` header must be present. For an unencoded body
    it must equal the number of bytes received. For a content-encoded
    (e.g. gzip) body it describes the compressed size, so the length of
    the decoded body is used instead.

    Raises
    ------
    MalformedResponseError
        If the header is missing, not an integer, or disagrees with an
        unencoded body.
    """
    header = response.headers.get("Content-Length")
    if header is None:
        raise MalformedResponseError("Response has no Content-Length header")
    try:
        announced = int(header)
    except ValueError as e:
        raise MalformedResponseError(f"Invalid Content-Length: {header!r}") from e

    received = len(response.content)
    encoding = response.headers.get("Content-Encoding", "identity").strip().lower()
    if encoding not in ("", "identity"):
        logger.debug(
            "Body is %s-encoded: %d bytes on the wire, %d decoded",
            encoding,
            announced,
            received,
        )
        return received
    if announced != received:
        raise MalformedResponseError(
            f"Content-Length is {announced} but {received} bytes were received"
        )
    return announced


class QVMConnection:
    """
    Authenticated connection to the QVM service.

    Parameters
    ----------
    config : Config, optional
        Explicit configuration. Defaults to :func:`get_config`.
    endpoint : str, optional
        Override for ``config.endpoint``.
    api_key : str, optional
        Override for ``config.api_key``.
    timeout : float, optional
        Override for ``config.timeout``.

    Attributes
    ----------
    config : Config
        Resolved configuration.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        endpoint: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
    ) -> None:
        base = config if config is not None else get_config()
        self.config = base.with_overrides(
            endpoint=endpoint,
            api_key=api_key,
            timeout=timeout,
        )
        self._session: requests.Session | None = None

    @property
    def session(self) -> requests.Session:
        """
        HTTP session carrying the authentication headers.

        Created on first access.

        Raises
        ------
        ConfigurationError
            If no API key is configured.
        """
        if self._session is None:
            api_key = self.config.require_api_key()
            session = requests.Session()
            session.headers.update(
                {
                    "X-Api-Key": api_key,
                    "Content-Type": "application/json; charset=utf-8",
                    "Accept": "application/json, application/octet-stream",
                    "Accept-Encoding": "identity",
                    "User-Agent": self.config.user_agent,
                }
            )
            self._session = session
            logger.debug("QVMConnection initialized: endpoint=%s", self.config.endpoint)
        return self._session

    def _post(self, payload: dict[str, Any]) -> requests.Response:
        """
        POST a payload to the endpoint.

        Raises
        ------
        ConfigurationError
            If no API key is configured.
        TransportError
            On network failure or non-success status.
        """
        session = self.session
        endpoint = self.config.endpoint
        kind = payload.get("type", "?")

        try:
            response = session.post(
                endpoint,
                json=payload,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(
                f"Request timeout after {self.config.timeout}s: {kind}"
            ) from e
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection error to {endpoint}: {e}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {kind}: {e}") from e

        logger.debug("POST %s [%s] -> %d", endpoint, kind, response.status_code)

        if not response.ok:
            raise TransportError(
                f"QVM error ({response.status_code}) for {kind}: "
                f"{_error_detail(response)}",
                status_code=response.status_code,
            )
        return response

    def ping(self) -> str:
        """Check that the service is reachable."""
        return self._post(ping_payload()).text

    def version(self) -> str:
        """Return the service version string."""
        return self._post(version_payload()).text

    def run(
        self,
        program: Any,
        addresses: Sequence[int],
        num_trials: int = 1,
    ) -> list[list[int]]:
        """
        Run a program repeatedly and sample classical memory.

        Parameters
        ----------
        program : Program or str
            Program to execute.
        addresses : sequence of int
            Classical memory addresses to read after each trial.
        num_trials : int, default=1
            Number of executions.

        Returns
        -------
        list of list of int
            One row per trial, each row ordered like ``addresses``.

        Raises
        ------
        MalformedResponseError
            If the reply is not a ``num_trials`` x ``len(addresses)`` table of bits.
        """
        payload = multishot_payload(str(program), addresses, num_trials)
        response = self._post(payload)

        try:
            rows = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Multishot reply is not JSON: {e}") from e

        return _check_samples(rows, num_trials, len(payload["addresses"]))

    def wavefunction(
        self,
        program: Any,
        addresses: Sequence[int] | None = None,
    ) -> tuple[NDArray[np.complex128], list[int]]:
        """
        Run a program once and return its final state.

        Parameters
        ----------
        program : Program or str
            Program to execute.
        addresses : sequence of int, optional
            Classical memory addresses to read back.

        Returns
        -------
        wavefunction : numpy.ndarray
            Complex amplitudes indexed by basis-state integer.
        memory_bits : list of int
            One bit per address, in the order given.
        """
        address_list = validate_addresses(addresses)
        response = self._post(wavefunction_payload(str(program), address_list))
        return decode(response.content, content_length(response), address_list)

    def close(self) -> None:
        """Close the HTTP session."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> QVMConnection:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"QVMConnection(endpoint={self.config.endpoint!r})"


def _check_samples(rows: Any, num_trials: int, width: int) -> list[list[int]]:
    if not isinstance(rows, list) or len(rows) != num_trials:
        raise MalformedResponseError(
            f"Expected {num_trials} trial rows, got {_describe(rows)}"
        )
    samples = []
    for i, row in enumerate(rows):
        if not isinstance(row, list) or len(row) != width:
            raise MalformedResponseError(
                f"Trial {i}: expected {width} bits, got {_describe(row)}"
            )
        if any(bit not in (0, 1) for bit in row):
            raise MalformedResponseError(f"Trial {i}: non-bit value in {row!r}")
        samples.append([int(bit) for bit in row])
    return samples


def _describe(value: Any) -> str:
    if isinstance(value, list):
        return f"{len(value)} entries"
    return type(value).__name__


# =============================================================================
# Module-level shortcuts using the process-wide configuration
# =============================================================================


def ping() -> str:
    """Ping the configured service."""
    with QVMConnection() as qvm:
        return qvm.ping()


def version() -> str:
    """Return the configured service's version string."""
    with QVMConnection() as qvm:
        return qvm.version()


def run(
    program: Any,
    addresses: Sequence[int],
    num_trials: int = 1,
) -> list[list[int]]:
    """Sample ``program`` on the configured service. See :meth:`QVMConnection.run`."""
    with QVMConnection() as qvm:
        return qvm.run(program, addresses, num_trials)


def wavefunction(
    program: Any,
    addresses: Sequence[int] | None = None,
) -> tuple[NDArray[np.complex128], list[int]]:
    """Fetch the final state of ``program``. See :meth:`QVMConnection.wavefunction`."""
    with QVMConnection() as qvm:
        return qvm.wavefunction(program, addresses)
