# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qvm-client

"""
Request payload builders.

Every request is a JSON object POSTed to the service endpoint, with a
``type`` field selecting the operation.
"""

from __future__ import annotations

from typing import Any, Sequence


def validate_addresses(addresses: Sequence[int] | None) -> list[int]:
    """
    Normalize an address list.

    Raises
    ------
    ValueError
        If any address is not a non-negative integer.
    """
    if addresses is None:
        return []
    result = []
    for address in addresses:
        if isinstance(address, bool) or not isinstance(address, int) or address < 0:
            raise ValueError(
                f"Addresses must be non-negative integers, got {address!r}"
            )
        result.append(address)
    return result


def validate_trials(trials: int) -> int:
    """Check that the trial count is a positive integer."""
    if isinstance(trials, bool) or not isinstance(trials, int) or trials < 1:
        raise ValueError(f"num_trials must be a positive integer, got {trials!r}")
    return trials


def ping_payload() -> dict[str, Any]:
    return {"type": "ping"}


def version_payload() -> dict[str, Any]:
    return {"type": "version"}


def multishot_payload(
    program: str,
    addresses: Sequence[int],
    trials: int,
) -> dict[str, Any]:
    """
    Build a sampling request.

    Parameters
    ----------
    program : str
        Program text.
    addresses : sequence of int
        Classical memory addresses to report for each trial.
    trials : int
        Number of times to run the program.
    """
    return {
        "type": "multishot",
        "addresses": validate_addresses(addresses),
        "trials": validate_trials(trials),
        "quil-instructions": str(program),
    }


def wavefunction_payload(
    program: str,
    addresses: Sequence[int] | None = None,
) -> dict[str, Any]:
    """Build a wavefunction request."""
    return {
        "type": "wavefunction",
        "quil-instructions": str(program),
        "addresses": validate_addresses(addresses),
    }
