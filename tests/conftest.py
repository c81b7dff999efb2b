# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""
Shared fixtures for qfacade tests.

Configuration and the runtime guard are process-wide; every test starts
from a clean environment and an uninitialized runtime.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator

import pytest
from click.testing import CliRunner
from qfacade import core
from qfacade.cli import cli
from qfacade.config import reset_config


@pytest.fixture(autouse=True)
def _reset_state() -> Iterator[None]:
    """Drop cached config and runtime info around each test."""
    reset_config()
    core.reset_runtime()
    yield
    reset_config()
    core.reset_runtime()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Environment with every QFACADE_* variable removed."""
    import os

    for key in list(os.environ):
        if key.startswith("QFACADE_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    return monkeypatch


@pytest.fixture
def bell_circuit() -> Any:
    """Measured two-qubit Bell circuit."""
    pytest.importorskip("qiskit")
    from qiskit import QuantumCircuit

    qc = QuantumCircuit(2, 2)
    qc.h(0)
    qc.cx(0, 1)
    qc.measure([0, 1], [0, 1])
    return qc


@pytest.fixture
def aer_simulator() -> Any:
    """Seeded Aer simulator."""
    qiskit_aer = pytest.importorskip("qiskit_aer")
    return qiskit_aer.AerSimulator(seed_simulator=1234)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def invoke(cli_runner: CliRunner, clean_env: pytest.MonkeyPatch) -> Callable[..., Any]:
    """
    Invoke CLI commands with a clean environment.

    Usage:
        result = invoke("version", "--format", "json")
    """

    def _invoke(*args: str) -> Any:
        return cli_runner.invoke(cli, list(args), obj={})

    return _invoke
