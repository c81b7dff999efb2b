# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: 2026 qfacade

"""
Quantum states, operators and information measures.

Wrappers around :mod:`qiskit.quantum_info`. States are ``Statevector``
or ``DensityMatrix`` objects; measures return plain floats.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Sequence

import numpy as np

from qfacade.core import (
    to_python,
    translate_errors,
    validate_qubit_count,
    with_qiskit,
)


if TYPE_CHECKING:
    from qiskit.quantum_info import (
        Choi,
        DensityMatrix,
        Operator,
        Pauli,
        SparsePauliOp,
        Statevector,
    )


logger = logging.getLogger(__name__)

_BELL_AMPLITUDES: dict[str, dict[int, float]] = {
    "phi_plus": {0b00: 1.0, 0b11: 1.0},
    "phi_minus": {0b00: 1.0, 0b11: -1.0},
    "psi_plus": {0b01: 1.0, 0b10: 1.0},
    "psi_minus": {0b01: 1.0, 0b10: -1.0},
}


# =============================================================================
# States
# =============================================================================


@with_qiskit
def statevector(data: Any, validate: bool = True) -> Statevector:
    """
    Build a statevector from amplitudes, a label or a circuit.

    Parameters
    ----------
    data : array-like, str or QuantumCircuit
        Amplitudes, a basis label such as ``"01+"``, or a circuit
        without measurements to simulate from the zero state.
    validate : bool
        Reject vectors that are not normalized.

    Raises
    ------
    ValueError
        If ``validate`` is set and the state is not normalized.
    """
    from qiskit import QuantumCircuit
    from qiskit.quantum_info import Statevector

    if isinstance(data, str):
        state = Statevector.from_label(data)
    elif isinstance(data, QuantumCircuit):
        state = Statevector.from_instruction(data)
    else:
        state = Statevector(data)
    if validate and not state.is_valid():
        raise ValueError("Statevector is not normalized")
    return state


@with_qiskit
def zero_state(num_qubits: int) -> Statevector:
    """``|0...0>`` on ``num_qubits`` qubits."""
    from qiskit.quantum_info import Statevector

    validate_qubit_count(num_qubits)
    return Statevector.from_label("0" * num_qubits)


@with_qiskit
def plus_state(num_qubits: int) -> Statevector:
    """``|+...+>`` on ``num_qubits`` qubits."""
    from qiskit.quantum_info import Statevector

    validate_qubit_count(num_qubits)
    return Statevector.from_label("+" * num_qubits)


@with_qiskit
def bell_state(kind: str = "phi_plus") -> Statevector:
    """
    One of the four Bell states.

    Parameters
    ----------
    kind : str
        ``"phi_plus"``, ``"phi_minus"``, ``"psi_plus"`` or
        ``"psi_minus"`` (hyphens accepted).

    Raises
    ------
    ValueError
        If ``kind`` names no Bell state.
    """
    from qiskit.quantum_info import Statevector

    key = kind.lower().replace("-", "_")
    if key not in _BELL_AMPLITUDES:
        raise ValueError(
            f"Unknown Bell state {kind!r}; expected one of {', '.join(_BELL_AMPLITUDES)}"
        )
    amplitudes = np.zeros(4, dtype=complex)
    for index, sign in _BELL_AMPLITUDES[key].items():
        amplitudes[index] = sign / math.sqrt(2)
    return Statevector(amplitudes)


@with_qiskit
def ghz_state(num_qubits: int) -> Statevector:
    """``(|0...0> + |1...1>) / sqrt(2)``."""
    from qiskit.quantum_info import Statevector

    validate_qubit_count(num_qubits)
    amplitudes = np.zeros(2**num_qubits, dtype=complex)
    amplitudes[0] = amplitudes[-1] = 1 / math.sqrt(2)
    return Statevector(amplitudes)


@with_qiskit
def w_state(num_qubits: int) -> Statevector:
    """Equal superposition of the single-excitation basis states."""
    from qiskit.quantum_info import Statevector

    validate_qubit_count(num_qubits)
    amplitudes = np.zeros(2**num_qubits, dtype=complex)
    for q in range(num_qubits):
        amplitudes[1 << q] = 1 / math.sqrt(num_qubits)
    return Statevector(amplitudes)


# =============================================================================
# State queries
# =============================================================================


def state_data(state: Any) -> list[Any]:
    """Amplitudes (or density matrix rows) as plain Python lists."""
    return to_python(state.data)


def state_dims(state: Any) -> list[int]:
    return list(state.dims())


def state_num_qubits(state: Any) -> int | None:
    """Number of qubits, or None for non-qubit dimensions."""
    return state.num_qubits


def is_valid_state(state: Any) -> bool:
    return bool(state.is_valid())


def probability(state: Any, outcome: str | int) -> float:
    """
    Probability of measuring a computational basis state.

    Parameters
    ----------
    state : Statevector or DensityMatrix
        State to measure.
    outcome : str or int
        Bitstring (qubit 0 rightmost) or basis index.

    Raises
    ------
    ValueError
        If the outcome is not a basis state of ``state``.
    """
    probs = np.asarray(state.probabilities())
    if isinstance(outcome, str):
        if len(outcome) != state.num_qubits:
            raise ValueError(
                f"Outcome {outcome!r} has {len(outcome)} bits, state has {state.num_qubits} qubits"
            )
        index = int(outcome, 2)
    else:
        index = int(outcome)
    if not 0 <= index < len(probs):
        raise ValueError(f"Outcome index {index} out of range [0, {len(probs)})")
    return float(probs[index])


def probabilities(state: Any, qargs: Sequence[int] | None = None) -> list[float]:
    """Measurement probabilities, optionally marginalized onto ``qargs``."""
    return to_python(state.probabilities(qargs))


@translate_errors
def sample_memory(state: Any, shots: int, seed: int | None = None) -> list[str]:
    """Per-shot bitstrings sampled from ``state``. Seeding works on a copy."""
    if seed is not None:
        state = state.copy()
        state.seed(seed)
    return to_python(state.sample_memory(shots))


@translate_errors
def sample_counts(state: Any, shots: int, seed: int | None = None) -> dict[str, int]:
    """Counts sampled from ``state``."""
    if seed is not None:
        state = state.copy()
        state.seed(seed)
    return to_python(dict(state.sample_counts(shots)))


# =============================================================================
# Density matrices
# =============================================================================


@with_qiskit
def density_matrix(data: Any) -> DensityMatrix:
    """Density matrix from a matrix, a statevector or a circuit."""
    from qiskit import QuantumCircuit
    from qiskit.quantum_info import DensityMatrix

    if isinstance(data, QuantumCircuit):
        return DensityMatrix.from_instruction(data)
    return DensityMatrix(data)


@with_qiskit
def partial_trace(state: Any, qargs: Sequence[int]) -> DensityMatrix:
    """Trace out the subsystems listed in ``qargs``."""
    from qiskit.quantum_info import partial_trace as qiskit_partial_trace

    return qiskit_partial_trace(state, list(qargs))


def _as_density_matrix(state: Any) -> DensityMatrix:
    from qiskit.quantum_info import DensityMatrix

    return state if isinstance(state, DensityMatrix) else DensityMatrix(state)


@translate_errors
def purity(state: Any) -> float:
    """``Tr(rho^2)``; 1.0 for pure states."""
    return float(np.real(_as_density_matrix(state).purity()))


@with_qiskit
def von_neumann_entropy(state: Any, base: int = 2) -> float:
    from qiskit.quantum_info import entropy

    return float(entropy(state, base=base))


# =============================================================================
# Measures
# =============================================================================


@with_qiskit
def state_fidelity(state1: Any, state2: Any, validate: bool = True) -> float:
    from qiskit.quantum_info import state_fidelity as qiskit_state_fidelity

    return float(qiskit_state_fidelity(state1, state2, validate=validate))


@with_qiskit
def process_fidelity(channel: Any, target: Any = None) -> float:
    """Process fidelity of ``channel`` to ``target`` (identity when omitted)."""
    from qiskit.quantum_info import process_fidelity as qiskit_process_fidelity

    return float(qiskit_process_fidelity(channel, target))


@with_qiskit
def trace_distance(state1: Any, state2: Any) -> float:
    """
    Trace distance ``0.5 * ||rho1 - rho2||_1``.

    Statevectors are converted to density matrices. The trace norm of
    the Hermitian difference is the sum of its absolute eigenvalues.
    """
    rho1 = _as_density_matrix(state1)
    rho2 = _as_density_matrix(state2)
    if rho1.dim != rho2.dim:
        raise ValueError(f"State dimensions differ: {rho1.dim} != {rho2.dim}")
    eigenvalues = np.linalg.eigvalsh(rho1.data - rho2.data)
    return float(0.5 * np.sum(np.abs(eigenvalues)))


@with_qiskit
def hellinger_fidelity(counts1: dict[str, int], counts2: dict[str, int]) -> float:
    """Hellinger fidelity of two count distributions."""
    from qiskit.quantum_info import hellinger_fidelity as qiskit_hellinger_fidelity

    return float(qiskit_hellinger_fidelity(counts1, counts2))


def entanglement_entropy(state: Any, trace_out: Sequence[int]) -> float:
    """
    Entropy (base 2) of the reduced state after tracing out ``trace_out``.

    For a pure bipartite state this is the entanglement entropy of the
    bipartition.
    """
    return von_neumann_entropy(partial_trace(state, trace_out), base=2)


@with_qiskit
def entanglement_of_formation(state: Any) -> float:
    """Entanglement of formation of a two-qubit state."""
    from qiskit.quantum_info import entanglement_of_formation as qiskit_eof

    return float(qiskit_eof(state))


@with_qiskit
def concurrence(state: Any) -> float:
    """Concurrence of a two-qubit state (or of a pure bipartite state)."""
    from qiskit.quantum_info import concurrence as qiskit_concurrence

    return float(qiskit_concurrence(state))


# =============================================================================
# Operators
# =============================================================================


@with_qiskit
def pauli_operator(label: str) -> Pauli:
    from qiskit.quantum_info import Pauli

    return Pauli(label)


@with_qiskit
def sparse_pauli_op(terms: Any) -> SparsePauliOp:
    """
    Sparse Pauli operator.

    Parameters
    ----------
    terms : str or list of (str, complex)
        A single label or weighted ``(label, coefficient)`` pairs.
    """
    from qiskit.quantum_info import SparsePauliOp

    if isinstance(terms, str):
        return SparsePauliOp(terms)
    return SparsePauliOp.from_list(list(terms))


def _as_operator(op: Any) -> Any:
    return sparse_pauli_op(op) if isinstance(op, str) else op


def _real_if_close(value: Any) -> Any:
    value = complex(value)
    if abs(value.imag) < 1e-12:
        return value.real
    return value


@translate_errors
def expectation_value(state: Any, op: Any) -> Any:
    """
    ``<state|op|state>``.

    Returns a float when the imaginary part vanishes (Hermitian
    ``op``), else a complex number.
    """
    return _real_if_close(state.expectation_value(_as_operator(op)))


@translate_errors
def variance(state: Any, op: Any) -> float:
    """``<op^2> - <op>^2`` for a Hermitian operator."""
    operator = _as_operator(op)
    mean = np.real(state.expectation_value(operator))
    second = np.real(state.expectation_value(operator.compose(operator)))
    return float(second - mean**2)


# =============================================================================
# Channels
# =============================================================================


@with_qiskit
def kraus_to_choi(kraus_ops: Sequence[Any]) -> Choi:
    """Choi matrix of the channel with the given Kraus operators."""
    from qiskit.quantum_info import Choi, Kraus

    return Choi(Kraus([np.asarray(k, dtype=complex) for k in kraus_ops]))


@with_qiskit
def choi_to_kraus(choi: Any) -> list[Any]:
    """Kraus operators of a Choi matrix, as nested lists."""
    from qiskit.quantum_info import Choi, Kraus

    if not isinstance(choi, Choi):
        choi = Choi(np.asarray(choi, dtype=complex))
    return [to_python(k) for k in Kraus(choi).data]


# =============================================================================
# Random objects
# =============================================================================


@with_qiskit
def random_statevector(dims: Any, seed: int | None = None) -> Statevector:
    """Haar-random statevector; ``dims`` is the total dimension or a tuple."""
    from qiskit.quantum_info import random_statevector as qiskit_random_statevector

    return qiskit_random_statevector(dims, seed=seed)


@with_qiskit
def random_density_matrix(
    dims: Any,
    rank: int | None = None,
    seed: int | None = None,
) -> DensityMatrix:
    from qiskit.quantum_info import random_density_matrix as qiskit_random_density_matrix

    return qiskit_random_density_matrix(dims, rank=rank, seed=seed)


@with_qiskit
def random_unitary(dims: Any, seed: int | None = None) -> Operator:
    """Haar-random unitary operator."""
    from qiskit.quantum_info import random_unitary as qiskit_random_unitary

    return qiskit_random_unitary(dims, seed=seed)
