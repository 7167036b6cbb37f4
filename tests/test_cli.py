# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qvm-client

"""CLI tests for the ``qvmc`` command."""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Callable

import pytest
import responses
from click.testing import CliRunner
from qvm_client.cli import cli, parse_addresses


TEST_ENDPOINT = "https://qvm.example.com/qvm"
TEST_API_KEY = "test-api-key-12345"

INV_SQRT2 = 1 / math.sqrt(2)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner: CliRunner, clean_env) -> Callable[..., Any]:
    """
    Invoke CLI commands against the mocked endpoint.

    Usage:
        result = invoke("ping")
        result = invoke("run", "prog.quil", "--trials", "3")
    """

    def _invoke(*args: str, input: str | None = None, api_key: str | None = TEST_API_KEY):
        base = ["--endpoint", TEST_ENDPOINT]
        if api_key:
            base += ["--api-key", api_key]
        return cli_runner.invoke(cli, [*base, *args], input=input, obj={})

    return _invoke


@pytest.fixture
def program_file(tmp_path: Path) -> Path:
    path = tmp_path / "bell.quil"
    path.write_text("H 0\nCNOT 0 1\n")
    return path


class TestParseAddresses:
    def test_empty(self):
        assert parse_addresses(None, None, "") == []

    def test_list(self):
        assert parse_addresses(None, None, "0, 1,5") == [0, 1, 5]

    def test_invalid(self):
        import click

        with pytest.raises(click.BadParameter):
            parse_addresses(None, None, "a,b")
        with pytest.raises(click.BadParameter):
            parse_addresses(None, None, "-1")

    def test_invalid_keeps_cause(self):
        import click

        with pytest.raises(click.BadParameter) as exc_info:
            parse_addresses(None, None, "0,x")

        assert isinstance(exc_info.value.__cause__, ValueError)


class TestPing:
    @responses.activate
    def test_ping(self, invoke: Callable):
        responses.add(responses.POST, TEST_ENDPOINT, body="pong", status=200)

        result = invoke("ping")

        assert result.exit_code == 0
        assert "pong" in result.output

    def test_missing_api_key(self, invoke: Callable):
        result = invoke("ping", api_key=None)

        assert result.exit_code == 1
        assert "API key is required" in result.output

    @responses.activate
    def test_server_error(self, invoke: Callable):
        responses.add(responses.POST, TEST_ENDPOINT, body="nope", status=500)

        result = invoke("version")

        assert result.exit_code == 1
        assert "500" in result.output


class TestRun:
    @responses.activate
    def test_pretty(self, invoke: Callable, program_file: Path):
        responses.add(responses.POST, TEST_ENDPOINT, json=[[0, 0], [1, 1]], status=200)

        result = invoke("run", str(program_file), "--addresses", "0,1", "--trials", "2")

        assert result.exit_code == 0
        assert result.output.splitlines() == ["00", "11"]

    @responses.activate
    def test_json(self, invoke: Callable, program_file: Path):
        responses.add(responses.POST, TEST_ENDPOINT, json=[[1]], status=200)

        result = invoke("run", str(program_file), "-a", "0", "--format", "json")

        assert result.exit_code == 0
        assert json.loads(result.output) == [[1]]

    @responses.activate
    def test_reads_stdin(self, invoke: Callable):
        responses.add(responses.POST, TEST_ENDPOINT, json=[[1]], status=200)

        result = invoke("run", "-", "-a", "0", input="X 0\nMEASURE 0 [0]\n")

        assert result.exit_code == 0
        body = json.loads(responses.calls[0].request.body)
        assert body["quil-instructions"] == "X 0\nMEASURE 0 [0]\n"

    def test_invalid_trials(self, invoke: Callable, program_file: Path):
        result = invoke("run", str(program_file), "--trials", "0")

        assert result.exit_code != 0


class TestWavefunction:
    @responses.activate
    def test_json(self, invoke: Callable, program_file: Path, encode_response):
        responses.add(
            responses.POST,
            TEST_ENDPOINT,
            body=encode_response([INV_SQRT2, 0, 0, INV_SQRT2], [1]),
            status=200,
            content_type="application/octet-stream",
            auto_calculate_content_length=True,
        )

        result = invoke("wavefunction", str(program_file), "-a", "2", "--format", "json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["amplitudes"][0] == [INV_SQRT2, 0.0]
        assert data["probabilities"][0] == pytest.approx(0.5)
        assert data["outcomes"]["00"] == pytest.approx(0.5)
        assert data["memory"] == [{"address": 2, "bit": 1}]

    @responses.activate
    def test_json_keeps_repeated_addresses(
        self, invoke: Callable, program_file: Path, encode_response
    ):
        """Each requested address gets its own entry, in request order."""
        responses.add(
            responses.POST,
            TEST_ENDPOINT,
            body=encode_response([1, 0], [0, 1]),
            status=200,
            content_type="application/octet-stream",
            auto_calculate_content_length=True,
        )

        result = invoke("wavefunction", str(program_file), "-a", "3,3", "--format", "json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["memory"] == [
            {"address": 3, "bit": 0},
            {"address": 3, "bit": 1},
        ]

    @responses.activate
    def test_pretty_keeps_repeated_addresses(
        self, invoke: Callable, program_file: Path, encode_response
    ):
        responses.add(
            responses.POST,
            TEST_ENDPOINT,
            body=encode_response([1, 0], [0, 1]),
            status=200,
            content_type="application/octet-stream",
            auto_calculate_content_length=True,
        )

        result = invoke("wavefunction", str(program_file), "-a", "3,3")

        assert result.exit_code == 0
        assert "Memory: [3]=0, [3]=1" in result.output

    @responses.activate
    def test_json_with_non_power_of_two_length(
        self, invoke: Callable, program_file: Path, encode_response
    ):
        """Amplitudes are printed even when they cannot be labelled by qubits."""
        responses.add(
            responses.POST,
            TEST_ENDPOINT,
            body=encode_response([0.6, 0.8j, 0]),
            status=200,
            content_type="application/octet-stream",
            auto_calculate_content_length=True,
        )

        result = invoke("wavefunction", str(program_file), "--format", "json")

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["amplitudes"] == [[0.6, 0.0], [0.0, 0.8], [0.0, 0.0]]
        assert data["probabilities"] == pytest.approx([0.36, 0.64, 0.0])
        assert data["outcomes"] is None

    @responses.activate
    def test_pretty(self, invoke: Callable, program_file: Path, encode_response):
        responses.add(
            responses.POST,
            TEST_ENDPOINT,
            body=encode_response([0, 1j]),
            status=200,
            content_type="application/octet-stream",
            auto_calculate_content_length=True,
        )

        result = invoke("wavefunction", str(program_file))

        assert result.exit_code == 0
        assert "0.000000+1.000000j" in result.output
        assert "Memory" not in result.output

    @responses.activate
    def test_malformed(self, invoke: Callable, program_file: Path):
        responses.add(
            responses.POST,
            TEST_ENDPOINT,
            body=b"\x00" * 20,
            status=200,
            content_type="application/octet-stream",
            auto_calculate_content_length=True,
        )

        result = invoke("wavefunction", str(program_file))

        assert result.exit_code == 1
        assert "not a multiple of 16" in result.output
