# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qvm-client

"""Shared test fixtures for qvm_client tests."""

from __future__ import annotations

import struct
from typing import Callable, Sequence

import pytest
from qvm_client.config import (
    ENV_API_KEY,
    ENV_ENDPOINT,
    ENV_TIMEOUT,
    ENV_VERIFY_SSL,
    Config,
    reset_config,
)


TEST_ENDPOINT = "https://qvm.example.com/qvm"
TEST_API_KEY = "test-api-key-12345"


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_config_singleton():
    """Every test starts and ends with no cached configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove all QVM_* variables from the environment."""
    for name in (ENV_ENDPOINT, ENV_API_KEY, ENV_TIMEOUT, ENV_VERIFY_SSL):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def config() -> Config:
    """Configuration pointing at the mocked endpoint."""
    return Config(endpoint=TEST_ENDPOINT, api_key=TEST_API_KEY, timeout=5.0)


# =============================================================================
# Wire Format Fixtures
# =============================================================================


def pack_memory(bits: Sequence[int]) -> bytes:
    """Pack bits LSB-first into octets, zero padded to a byte boundary."""
    out = bytearray((len(bits) + 7) // 8)
    for i, bit in enumerate(bits):
        if bit:
            out[i // 8] |= 1 << (i % 8)
    return bytes(out)


def pack_amplitudes(amplitudes: Sequence[complex]) -> bytes:
    """Pack amplitudes as big-endian (real, imag) double pairs."""
    return b"".join(struct.pack(">dd", a.real, a.imag) for a in amplitudes)


@pytest.fixture
def encode_response() -> Callable[[Sequence[complex], Sequence[int]], bytes]:
    """Build a wavefunction response body from amplitudes and memory bits."""

    def _encode(amplitudes: Sequence[complex], bits: Sequence[int] = ()) -> bytes:
        return pack_memory(bits) + pack_amplitudes([complex(a) for a in amplitudes])

    return _encode
