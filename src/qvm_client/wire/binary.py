# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qvm-client

"""
Fixed-width binary primitives.

Byte order and bit order here are imposed by the QVM wire format:

- doubles are IEEE-754 binary64, big-endian
- bits within an octet are read least-significant first
"""

from __future__ import annotations

import struct

from qvm_client.errors import InvalidInputLengthError


DOUBLE_WIDTH = 8
OCTET_WIDTH = 8

_DOUBLE = struct.Struct(">d")


def decode_double(data: bytes) -> float:
    """
    Interpret exactly eight bytes as a big-endian binary64 value.

    Parameters
    ----------
    data : bytes
        Eight-byte window.

    Returns
    -------
    float
        Decoded value. NaN and infinities pass through unchanged.

    Raises
    ------
    InvalidInputLengthError
        If ``data`` is not exactly eight bytes long.
    """
    if len(data) != DOUBLE_WIDTH:
        raise InvalidInputLengthError(DOUBLE_WIDTH, len(data))
    return _DOUBLE.unpack(data)[0]


def octet_bits(octet: int) -> list[int]:
    """Expand one byte into its eight bits, bit 0 first."""
    return [(octet >> i) & 1 for i in range(OCTET_WIDTH)]
