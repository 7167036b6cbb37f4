# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qvm-client

"""
Wavefunction response decoder.

A wavefunction response is a single octet stream laid out as::

    +----------------------------+----------------------------------+
    | memory region              | wavefunction region              |
    | ceil(n_addresses / 8) B    | 16 B per amplitude               |
    | bits packed LSB first      | (real >d)(imag >d) per amplitude |
    +----------------------------+----------------------------------+

There is no delimiter or length prefix. The memory region size depends
only on how many addresses were requested, and whatever follows it must
be a whole number of amplitudes.

Examples
--------
>>> import struct
>>> body = bytes([0b11]) + struct.pack(">dd", 1.0, 0.0) + struct.pack(">dd", 0.0, 0.0)
>>> wf, bits = decode(body, len(body), [0, 1])
>>> wf
array([1.+0.j, 0.+0.j])
>>> bits
[1, 1]
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

import numpy as np
from numpy.typing import NDArray
from qvm_client.errors import MalformedResponseError
from qvm_client.wire.binary import DOUBLE_WIDTH, decode_double, octet_bits
from qvm_client.wire.layout import (
    AMPLITUDE_WIDTH,
    memory_region_bytes,
    wavefunction_region_bytes,
)


logger = logging.getLogger(__name__)


def _decode_memory(octets: bytes, memory_bytes: int, num_addresses: int) -> list[int]:
    """Unpack the memory region, dropping padding bits past ``num_addresses``."""
    bits: list[int] = []
    for octet in octets[:memory_bytes]:
        bits.extend(octet_bits(octet))
    return bits[:num_addresses]


def _decode_amplitudes(
    octets: bytes,
    offset: int,
    count: int,
) -> NDArray[np.complex128]:
    """Read ``count`` complex amplitudes starting at ``offset``."""
    wavefunction = np.zeros(count, dtype=np.complex128)
    for i in range(count):
        p = offset + AMPLITUDE_WIDTH * i
        real = decode_double(octets[p : p + DOUBLE_WIDTH])
        imag = decode_double(octets[p + DOUBLE_WIDTH : p + AMPLITUDE_WIDTH])
        wavefunction[i] = complex(real, imag)
    return wavefunction


def decode(
    octets: bytes,
    num_octets: int | None,
    addresses: Sequence[int],
) -> tuple[NDArray[np.complex128], list[int]]:
    """
    Decode a wavefunction response.

    Parameters
    ----------
    octets : bytes
        Raw response body.
    num_octets : int
        Exact body length as reported by the transport.
    addresses : sequence of int
        Classical memory addresses requested with the program, in order.

    Returns
    -------
    wavefunction : numpy.ndarray
        Complex amplitudes indexed by basis-state integer.
    memory_bits : list of int
        One bit per address, in the same order as ``addresses``.

    Raises
    ------
    MalformedResponseError
        If ``num_octets`` is missing, disagrees with the buffer, or is
        inconsistent with the layout implied by ``addresses``.
    """
    if num_octets is None:
        raise MalformedResponseError("Response length is unavailable")
    if num_octets < 0:
        raise MalformedResponseError(f"Invalid response length: {num_octets}")

    octets = bytes(octets)
    if len(octets) < num_octets:
        raise MalformedResponseError(
            f"Response truncated: expected {num_octets} bytes, got {len(octets)}"
        )

    num_addresses = len(addresses)
    memory_bytes = memory_region_bytes(num_addresses)
    wf_bytes = wavefunction_region_bytes(num_octets, memory_bytes)
    wf_count = wf_bytes // AMPLITUDE_WIDTH

    logger.debug(
        "Decoding wavefunction: %d bytes, %d memory bytes, %d amplitudes",
        num_octets,
        memory_bytes,
        wf_count,
    )

    memory_bits = _decode_memory(octets, memory_bytes, num_addresses)
    wavefunction = _decode_amplitudes(octets, memory_bytes, wf_count)
    return wavefunction, memory_bits


def outcome_probabilities(
    wavefunction: Sequence[complex] | NDArray[np.complex128],
    *,
    threshold: float = 0.0,
) -> dict[str, float]:
    """
    Map each basis state to the probability of observing it.

    Parameters
    ----------
    wavefunction : array_like of complex
        Amplitudes indexed by basis-state integer.
    threshold : float, default=0.0
        Outcomes with probability at or below this value are omitted.

    Returns
    -------
    dict
        Zero-padded bitstring (most significant qubit first) to probability.

    Raises
    ------
    ValueError
        If the length is not a power of two.
    """
    amplitudes = np.asarray(wavefunction, dtype=np.complex128)
    size = amplitudes.shape[0]
    if size == 0:
        return {}
    if size & (size - 1):
        raise ValueError(f"Wavefunction length {size} is not a power of two")

    width = int(math.log2(size))
    probs = np.abs(amplitudes) ** 2
    return {
        format(i, f"0{width}b") if width else "": float(p)
        for i, p in enumerate(probs)
        if p > threshold
    }
