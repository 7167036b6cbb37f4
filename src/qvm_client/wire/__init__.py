# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qvm-client

"""
Wire-format codecs for QVM responses.

Submodules
----------
- :mod:`qvm_client.wire.binary` - fixed-width primitives (doubles, bit expansion)
- :mod:`qvm_client.wire.layout` - region size arithmetic
- :mod:`qvm_client.wire.wavefunction` - wavefunction response decoder
"""

from __future__ import annotations

from qvm_client.wire.binary import decode_double, octet_bits
from qvm_client.wire.layout import (
    memory_region_bytes,
    round_up_to_multiple,
    wavefunction_region_bytes,
)
from qvm_client.wire.wavefunction import decode, outcome_probabilities


__all__ = [
    "decode",
    "decode_double",
    "memory_region_bytes",
    "octet_bits",
    "outcome_probabilities",
    "round_up_to_multiple",
    "wavefunction_region_bytes",
]
