# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qvm-client

"""
HTTP API for the remote QVM service.

- :class:`QVMConnection` - authenticated connection performing requests
- :mod:`qvm_client.api.payloads` - request body builders
"""

from __future__ import annotations

from qvm_client.api.client import QVMConnection


__all__ = ["QVMConnection"]
