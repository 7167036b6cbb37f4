# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qvm-client

"""
Region arithmetic for wavefunction responses.

A response is a memory region followed directly by a wavefunction
region. Neither carries a length prefix; the boundary is computed from
the number of requested addresses alone.
"""

from __future__ import annotations

from qvm_client.errors import MalformedResponseError
from qvm_client.wire.binary import DOUBLE_WIDTH, OCTET_WIDTH


# real part followed by imaginary part
AMPLITUDE_WIDTH = 2 * DOUBLE_WIDTH


def round_up_to_multiple(n: int, m: int) -> int:
    """
    Return the smallest multiple of ``m`` that is >= ``n``.

    Raises
    ------
    ZeroDivisionError
        If ``m`` is zero.
    """
    return -(-n // m) * m


def memory_region_bytes(num_addresses: int) -> int:
    """Number of bytes holding ``num_addresses`` bit-packed memory bits."""
    return round_up_to_multiple(num_addresses, OCTET_WIDTH) // OCTET_WIDTH


def wavefunction_region_bytes(num_octets: int, memory_bytes: int) -> int:
    """
    Size of the amplitude region that follows the memory region.

    Parameters
    ----------
    num_octets : int
        Total response length.
    memory_bytes : int
        Size of the leading memory region.

    Returns
    -------
    int
        Region size, a non-negative multiple of :data:`AMPLITUDE_WIDTH`.

    Raises
    ------
    MalformedResponseError
        If the remainder is negative or not a whole number of amplitudes.
    """
    remainder = num_octets - memory_bytes
    if remainder < 0:
        raise MalformedResponseError(
            f"Response of {num_octets} bytes is shorter than its "
            f"{memory_bytes}-byte memory region"
        )
    if remainder % AMPLITUDE_WIDTH:
        raise MalformedResponseError(
            f"Wavefunction region of {remainder} bytes is not a multiple "
            f"of {AMPLITUDE_WIDTH}"
        )
    return remainder
