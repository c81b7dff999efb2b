# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""
Installation checks and execution timing.

Example
-------
>>> from qfacade import diagnostics
>>> diagnostics.verify_installation()["status"]
'success'
>>> from qfacade.circuit import random_circuit
>>> timings = diagnostics.benchmark_circuit(random_circuit(3, 10, seed=1), shots=1000)
>>> sorted(timings)
['average_ms', 'iterations', 'max_ms', 'min_ms', 'shots', 'times_ms']
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from qfacade import circuit as qc
from qfacade.backends import aer_simulator, execute_circuit
from qfacade.config import get_config
from qfacade.core import _is_int, initialize
from qfacade.errors import BackendUnavailableError, QFacadeError, ValidationError
from qfacade.primitives import sample_circuit


if TYPE_CHECKING:
    from qiskit import QuantumCircuit


logger = logging.getLogger(__name__)


def benchmark_circuit(
    circuit: QuantumCircuit,
    shots: int | None = None,
    iterations: int = 5,
    backend: Any = None,
) -> dict[str, Any]:
    """
    Time repeated executions of a circuit.

    Each iteration is one full :func:`~qfacade.backends.execute_circuit`
    call, transpilation included.

    Parameters
    ----------
    circuit : QuantumCircuit
        Measured circuit.
    shots : int, optional
        Shots per execution. Defaults to ``Config.default_shots``.
    iterations : int
        Number of timed executions; must be positive.
    backend : BackendV2, optional
        Defaults to one Aer simulator shared by all iterations.

    Returns
    -------
    dict
        ``average_ms``, ``min_ms``, ``max_ms``, ``shots``,
        ``iterations`` and the per-run ``times_ms``.
    """
    if not _is_int(iterations) or iterations < 1:
        raise ValidationError(f"Iterations must be a positive integer, got {iterations!r}")
    if shots is None:
        shots = get_config().default_shots
    if backend is None:
        backend = aer_simulator()

    times_ms: list[float] = []
    for _ in range(iterations):
        start = time.perf_counter()
        execute_circuit(circuit, backend, shots=shots)
        times_ms.append((time.perf_counter() - start) * 1000.0)

    logger.debug("Benchmarked %d runs of %d shots: %s", iterations, shots, times_ms)
    return {
        "average_ms": sum(times_ms) / len(times_ms),
        "min_ms": min(times_ms),
        "max_ms": max(times_ms),
        "shots": shots,
        "iterations": iterations,
        "times_ms": times_ms,
    }


def verify_installation() -> dict[str, Any]:
    """
    Check that the SDK imports and a small circuit runs.

    Never raises for facade failures; they are reported in the result
    with ``status`` set to ``"error"``.

    Returns
    -------
    dict
        On success: ``status``, ``qiskit_version``, ``aer_version``,
        ``python_version``, ``simple_circuit_works``, ``aer_available``
        and ``message``. On failure: ``status``, ``error`` and
        ``message``.
    """
    try:
        info = initialize()
        circuit = qc.measure_all(qc.h(qc.quantum_circuit(1, name="verify"), 0))
        counts = sample_circuit(circuit, shots=100)
        try:
            aer_simulator()
            aer_available = True
        except BackendUnavailableError as exc:
            logger.info("Aer simulator unavailable: %s", exc)
            aer_available = False
    except QFacadeError as exc:
        logger.warning("Installation check failed: %s", exc)
        return {
            "status": "error",
            "error": str(exc),
            "message": "qfacade installation has issues.",
        }

    return {
        "status": "success",
        "qiskit_version": info.qiskit_version,
        "aer_version": info.aer_version,
        "python_version": info.python_version,
        "simple_circuit_works": sum(counts.values()) == 100,
        "aer_available": aer_available,
        "message": "qfacade is working correctly.",
    }
