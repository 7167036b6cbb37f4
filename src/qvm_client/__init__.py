"""
qvm-client: client for a remote quantum virtual machine service.

Quick Start
-----------
>>> from qvm_client import Program, QVMConnection
>>> qvm = QVMConnection(endpoint="http://localhost:5000", api_key="xxxx")
>>> qvm.ping()
'pong'

Sampling
--------
>>> bell = Program("H 0", "CNOT 0 1", "MEASURE 0 [0]", "MEASURE 1 [1]")
>>> qvm.run(bell, [0, 1], num_trials=3)
[[0, 0], [1, 1], [1, 1]]

Wavefunction
------------
>>> wf, bits = qvm.wavefunction(Program("H 0", "CNOT 0 1"))
>>> wf
array([0.70710678+0.j, 0.        +0.j, 0.        +0.j, 0.70710678+0.j])

Process-wide Shortcuts
----------------------
>>> import qvm_client
>>> qvm_client.set_config(qvm_client.Config(api_key="xxxx"))
>>> qvm_client.version()

Submodules
----------
- qvm_client.api: Connection and request payloads
- qvm_client.wire: Binary response decoding
- qvm_client.config: Configuration management
- qvm_client.program: Program builder
- qvm_client.errors: Public exception types
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version as _pkg_version
from typing import TYPE_CHECKING, Any


__all__ = [
    # Version
    "__version__",
    # Connection
    "QVMConnection",
    "ping",
    "version",
    "run",
    "wavefunction",
    # Program
    "Program",
    # Config
    "Config",
    "get_config",
    "set_config",
    "reset_config",
    # Errors
    "QVMClientError",
    "ConfigurationError",
    "TransportError",
    "MalformedResponseError",
    "InvalidInputLengthError",
]


try:
    __version__ = _pkg_version("qvm-client")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"


if TYPE_CHECKING:
    from qvm_client.api.client import QVMConnection, ping, run, version, wavefunction
    from qvm_client.config import Config, get_config, reset_config, set_config
    from qvm_client.errors import (
        ConfigurationError,
        InvalidInputLengthError,
        MalformedResponseError,
        QVMClientError,
        TransportError,
    )
    from qvm_client.program import Program


_LAZY_IMPORTS = {
    "QVMConnection": ("qvm_client.api.client", "QVMConnection"),
    "ping": ("qvm_client.api.client", "ping"),
    "version": ("qvm_client.api.client", "version"),
    "run": ("qvm_client.api.client", "run"),
    "wavefunction": ("qvm_client.api.client", "wavefunction"),
    "Program": ("qvm_client.program", "Program"),
    "Config": ("qvm_client.config", "Config"),
    "get_config": ("qvm_client.config", "get_config"),
    "set_config": ("qvm_client.config", "set_config"),
    "reset_config": ("qvm_client.config", "reset_config"),
    "QVMClientError": ("qvm_client.errors", "QVMClientError"),
    "ConfigurationError": ("qvm_client.errors", "ConfigurationError"),
    "TransportError": ("qvm_client.errors", "TransportError"),
    "MalformedResponseError": ("qvm_client.errors", "MalformedResponseError"),
    "InvalidInputLengthError": ("qvm_client.errors", "InvalidInputLengthError"),
}


def __getattr__(name: str) -> Any:
    """Lazy-import handler."""
    if name in _LAZY_IMPORTS:
        module_path, attr_name = _LAZY_IMPORTS[name]
        module = __import__(module_path, fromlist=[attr_name])
        value = getattr(module, attr_name)
        globals()[name] = value
        return value
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    """List available public attributes."""
    return sorted(set(__all__) | set(_LAZY_IMPORTS.keys()))
