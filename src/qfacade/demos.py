# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""Small end-to-end circuits used by the CLI and as smoke tests."""

from __future__ import annotations

import logging

from qfacade import circuit as qc
from qfacade.backends import execute_circuit


logger = logging.getLogger(__name__)


def hello_quantum(shots: int | None = None) -> dict[str, int]:
    """One qubit in superposition: roughly half ``0``, half ``1``."""
    circuit = qc.quantum_circuit(1, name="hello_quantum")
    qc.measure(qc.h(circuit, 0), 0, 0)
    return execute_circuit(circuit, shots=shots)


def bell_pair(shots: int | None = None) -> dict[str, int]:
    """Bell pair: only ``00`` and ``11`` are observed."""
    circuit = qc.quantum_circuit(2, name="bell_pair")
    qc.cx(qc.h(circuit, 0), 0, 1)
    qc.measure(qc.measure(circuit, 0, 0), 1, 1)
    return execute_circuit(circuit, shots=shots)


def ghz_triple(shots: int | None = None) -> dict[str, int]:
    """Three-qubit GHZ state: only ``000`` and ``111`` are observed."""
    circuit = qc.quantum_circuit(3, name="ghz_triple")
    qc.h(circuit, 0)
    for target in (1, 2):
        qc.cx(circuit, 0, target)
    for q in range(3):
        qc.measure(circuit, q, q)
    return execute_circuit(circuit, shots=shots)


DEMOS = {
    "hello": hello_quantum,
    "bell": bell_pair,
    "ghz": ghz_triple,
}
