# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qvm-client

"""
Command-line interface.

Registered as the ``qvmc`` console script.

Commands
--------
ping
    Check that the service answers.
version
    Print the service version.
run
    Sample a program and print classical memory per trial.
wavefunction
    Print the final state and requested memory bits of a program.
"""

from __future__ import annotations

import json
import logging
from typing import IO, Any, Callable

import click
from qvm_client.api.client import QVMConnection
from qvm_client.config import get_config
from qvm_client.errors import QVMClientError
from qvm_client.wire.wavefunction import outcome_probabilities


def echo(msg: str, *, err: bool = False) -> None:
    click.echo(msg, err=err)


def print_json(obj: Any) -> None:
    click.echo(json.dumps(obj, indent=2, default=str))


def parse_addresses(
    ctx: click.Context | None,
    param: click.Parameter | None,
    value: str | None,
) -> list[int]:
    """Parse a comma-separated address list such as ``0,1,5``."""
    if not value:
        return []
    try:
        addresses = [int(part) for part in value.split(",") if part.strip()]
    except ValueError as e:
        raise click.BadParameter(f"expected comma-separated integers, got {value!r}") from e
    if any(a < 0 for a in addresses):
        raise click.BadParameter("addresses must be non-negative")
    return addresses


def _connection(ctx: click.Context) -> QVMConnection:
    return QVMConnection(get_config(), **ctx.obj["overrides"])


def _call(ctx: click.Context, fn: Callable[[QVMConnection], Any]) -> Any:
    """Invoke ``fn`` with a connection, turning library errors into CLI errors."""
    try:
        with _connection(ctx) as qvm:
            return fn(qvm)
    except QVMClientError as e:
        raise click.ClickException(str(e)) from e


def format_complex(value: complex) -> str:
    sign = "-" if value.imag < 0 else "+"
    return f"{value.real:.6f}{sign}{abs(value.imag):.6f}j"


@click.group()
@click.option("--endpoint", default=None, help="Service URL (overrides QVM_ENDPOINT).")
@click.option("--api-key", default=None, help="API key (overrides QVM_API_KEY).")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(
    ctx: click.Context,
    endpoint: str | None,
    api_key: str | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """Client for a remote quantum virtual machine."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )
    ctx.ensure_object(dict)
    ctx.obj["overrides"] = {
        "endpoint": endpoint,
        "api_key": api_key,
        "timeout": timeout,
    }


@cli.command("ping")
@click.pass_context
def ping_command(ctx: click.Context) -> None:
    """Check that the service answers."""
    echo(_call(ctx, lambda qvm: qvm.ping()))


@cli.command("version")
@click.pass_context
def version_command(ctx: click.Context) -> None:
    """Print the service version."""
    echo(_call(ctx, lambda qvm: qvm.version()))


@cli.command("run")
@click.argument("program_file", type=click.File("r"))
@click.option(
    "--addresses",
    "-a",
    callback=parse_addresses,
    default="",
    help="Comma-separated classical memory addresses.",
)
@click.option("--trials", "-n", type=click.IntRange(min=1), default=1, show_default=True)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["pretty", "json"]),
    default="pretty",
)
@click.pass_context
def run_command(
    ctx: click.Context,
    program_file: IO[str],
    addresses: list[int],
    trials: int,
    fmt: str,
) -> None:
    """
    Sample PROGRAM_FILE and print memory bits per trial.

    Use - to read the program from stdin.
    """
    program = program_file.read()
    samples = _call(ctx, lambda qvm: qvm.run(program, addresses, trials))

    if fmt == "json":
        print_json(samples)
        return

    for row in samples:
        echo("".join(str(bit) for bit in row) if row else "(no addresses)")


@cli.command("wavefunction")
@click.argument("program_file", type=click.File("r"))
@click.option(
    "--addresses",
    "-a",
    callback=parse_addresses,
    default="",
    help="Comma-separated classical memory addresses.",
)
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["pretty", "json"]),
    default="pretty",
)
@click.pass_context
def wavefunction_command(
    ctx: click.Context,
    program_file: IO[str],
    addresses: list[int],
    fmt: str,
) -> None:
    """
    Print the final state of PROGRAM_FILE.

    Use - to read the program from stdin.
    """
    program = program_file.read()
    wf, bits = _call(ctx, lambda qvm: qvm.wavefunction(program, addresses))

    size = len(wf)
    width = (size - 1).bit_length() if size else 0

    if fmt == "json":
        # outcome labels need a whole number of qubits
        outcomes = outcome_probabilities(wf) if size & (size - 1) == 0 else None
        print_json(
            {
                "amplitudes": [[float(a.real), float(a.imag)] for a in wf],
                "probabilities": [float(abs(a) ** 2) for a in wf],
                "outcomes": outcomes,
                "memory": [{"address": a, "bit": b} for a, b in zip(addresses, bits)],
            }
        )
        return

    echo(f"{'State':<{max(width, 5)}}  {'Amplitude':>24}  {'Prob':>8}")
    echo("-" * (max(width, 5) + 36))
    for i, amp in enumerate(wf):
        state = format(i, f"0{width}b") if width else ""
        echo(f"{state:<{max(width, 5)}}  {format_complex(amp):>24}  {abs(amp) ** 2:>8.4f}")

    if addresses:
        echo("")
        echo("Memory: " + ", ".join(f"[{a}]={b}" for a, b in zip(addresses, bits)))


def main() -> None:
    """Run the ``qvmc`` CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
